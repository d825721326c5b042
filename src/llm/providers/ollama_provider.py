from __future__ import annotations
import os
from typing import Optional

import httpx

from taskflow.errors import LLMError
from .base import LLMProvider

class OllamaProvider(LLMProvider):
    """Local Ollama chat API in JSON mode."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 60.0):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = (base_url or os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")).strip().rstrip("/")
        self.timeout = timeout

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        payload = {
            "model": model or self.model,
            "stream": False,
            "format": "json",
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "options": {"temperature": 0.2},
        }

        with httpx.Client(timeout=self.timeout) as client:
            r = client.post(f"{self.base_url}/api/chat", json=payload)
            r.raise_for_status()
            try:
                data = r.json()
            except ValueError as e:
                raise LLMError(f"Ollama response is not JSON: {e}") from e

        message = (data.get("message") if isinstance(data, dict) else None) or {}
        if "content" not in message:
            raise LLMError("Ollama response has no message content")
        return message["content"]
