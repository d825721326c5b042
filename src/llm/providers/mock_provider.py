from __future__ import annotations
import json
import re
from typing import Optional

from llm.providers.base import LLMProvider

_INPUT_RE = re.compile(r'Input:\s*"([^"]*)"')
_SPLIT_RE = re.compile(r",?\s*\b(?:and then|then|after that)\b\s*,?|;", re.IGNORECASE)
_DURATION_RE = re.compile(r"\bfor\s+(\d+(?:\.\d+)?\s*(?:hours?|hrs?|minutes?|mins?)(?:\s+\d+\s*(?:minutes?|mins?))?)", re.IGNORECASE)
_AT_RE = re.compile(r"\bat\s+\d{1,2}(?::\d{2})?\s*(?:am|pm)?", re.IGNORECASE)


class MockProvider(LLMProvider):
    """
    Offline stand-in for a real model: splits the instruction on sequencing
    words ("then", "after that") and pulls out "for <duration>" and "at <time>".
    """

    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        m = _INPUT_RE.search(user)
        if not m:
            return json.dumps({"tasks": []})

        drafts = []
        for chunk in (p.strip(" ,.") for p in _SPLIT_RE.split(m.group(1))):
            if not chunk:
                continue

            draft = {"title": chunk, "description": ""}

            duration = _DURATION_RE.search(chunk)
            if duration:
                draft["duration_text"] = duration.group(1)
                draft["title"] = (chunk[:duration.start()] + chunk[duration.end():]).strip(" ,.")

            at = _AT_RE.search(draft["title"])
            if at:
                draft["time_phrase"] = at.group(0)
                draft["title"] = (draft["title"][:at.start()] + draft["title"][at.end():]).strip(" ,.")
            elif drafts:
                draft["time_phrase"] = "after previous task"

            draft["title"] = draft["title"][:1].upper() + draft["title"][1:]
            drafts.append(draft)

        return json.dumps({"tasks": drafts})
