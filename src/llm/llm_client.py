import json
import logging
import os
import re
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from llm.providers.base import LLMProvider
from llm.schemas import DraftExtractionResult
from taskflow.errors import LLMError
from taskflow.models import TaskDraft

logger = logging.getLogger(__name__)

EMPTY_RESULT = '{"tasks": []}'

SYSTEM_PROMPT = (
    "You are a task parsing assistant that can identify multiple tasks in a single input. "
    "Respond with ONLY a valid JSON object."
)

EXTRACTION_PROMPT = """Parse the following natural language input into structured task format(s).

For each task identified in the input, extract:
- title: Task title (clear and specific)
- description: Additional context and details
- duration_text: Original duration text from input (e.g. "2 hours")
- estimated_duration: Duration in minutes
- time_phrase: Original time expression (e.g. "at 7am", "in 2 hours", "after that")
- deadline: ISO date string if a deadline is mentioned
- priority: One of ["urgent_important", "urgent_not_important", "not_urgent_important", "not_urgent_not_important"]
- category: One of ["Work", "Health", "Personal", "Study", "Errands"]
- tags: Array of relevant tags (max 5)

Important:
- Create separate tasks for distinct activities
- If tasks are sequential (e.g. "then", "after that"), list them in order
- Omit any field that is not stated or clearly implied
{tier_hint}
Input: "{text}"

Answer as {{"tasks": [...]}}."""

_TIER_HINTS = {
    "small": "- Be conservative: keep output minimal and only include title, duration_text and time_phrase\n",
    "large": "",
}

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def get_provider(name: Optional[str] = None) -> LLMProvider:
    """Build the provider named by LLM_PROVIDER (mock, openai, ollama)."""
    name = (name or os.getenv("LLM_PROVIDER", "mock")).strip().lower()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider()
    if name != "mock":
        logger.warning(f"Unknown LLM_PROVIDER {name!r}, falling back to mock")
    from llm.providers.mock_provider import MockProvider
    return MockProvider()


def extract_json_text(raw: str) -> str:
    """Pull the JSON document out of a model answer (code fences, chatter around it)."""
    text = _FENCE_RE.sub("", (raw or "").strip())
    if not text:
        return EMPTY_RESULT

    try:
        json.loads(text)
        return text
    except json.JSONDecodeError:
        pass

    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = text.find(opener), text.rfind(closer)
        if start != -1 and end > start:
            candidate = text[start:end + 1]
            try:
                json.loads(candidate)
                return candidate
            except json.JSONDecodeError:
                continue

    logger.warning(f"Model output is not JSON, ignoring it: {text[:80]!r}")
    return EMPTY_RESULT


def _normalize_draft(item: Any) -> Any:
    if not isinstance(item, dict):
        return item
    try:
        return TaskDraft.model_validate(item).model_dump(exclude_none=True)
    except ValidationError as e:
        logger.warning(f"Draft {item.get('title')!r} does not match the draft shape: {e.error_count()} error(s)")
        return item


class LLMClient:
    """Turns free text into task drafts through a pluggable provider.

    The model tier is a knob for cost: "small" asks for minimal output and
    picks LLM_MODEL_SMALL, "large" picks LLM_MODEL_LARGE.
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self.provider = provider or get_provider()

    def _select_model_name(self, model_tier: str) -> Optional[str]:
        if model_tier == "small":
            return os.getenv("LLM_MODEL_SMALL") or None
        return os.getenv("LLM_MODEL_LARGE") or None

    def complete(self, text: str, model_tier: str = "large") -> str:
        prompt = EXTRACTION_PROMPT.format(
            text=text.replace('"', "'"),
            tier_hint=_TIER_HINTS.get(model_tier, ""),
        )
        try:
            raw = self.provider.generate(
                system=SYSTEM_PROMPT,
                user=prompt,
                model=self._select_model_name(model_tier),
            )
        except httpx.HTTPError as e:
            raise LLMError(f"LLM request failed: {e}") from e
        return extract_json_text(raw)

    def extract_tasks(self, text: str, model_tier: str = "large") -> list[Any]:
        data = json.loads(self.complete(text, model_tier=model_tier))

        if isinstance(data, list):
            items = data
        elif isinstance(data, dict) and "tasks" in data:
            try:
                items = DraftExtractionResult.model_validate(data).tasks
            except ValidationError:
                logger.warning("Model answered with a non-list 'tasks' field")
                items = []
        elif isinstance(data, dict) and data:
            # a single draft without the envelope
            items = [data]
        else:
            items = []

        return [_normalize_draft(item) for item in items]
