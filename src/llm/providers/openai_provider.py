from __future__ import annotations
import os
from typing import Optional

import httpx

from taskflow.errors import LLMError
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    """OpenAI-compatible chat completions endpoint, asked for a JSON object."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, timeout: float = 30.0):
        self.api_key = (api_key or os.getenv("OPENAI_API_KEY", "")).strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")).strip().rstrip("/")
        self.timeout = timeout

        if not self.api_key:
            raise LLMError("OPENAI_API_KEY is missing")

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        payload = {
            "model": model or self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": 0.2,
            "response_format": {"type": "json_object"},
        }

        with httpx.Client(timeout=self.timeout) as client:
            r = client.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
            )
            r.raise_for_status()
            try:
                data = r.json()
            except ValueError as e:
                raise LLMError(f"Completion response is not JSON: {e}") from e

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Unexpected completion payload: {e}") from e
