from __future__ import annotations

import math
import re
from typing import Any, Optional

from taskflow.errors import InvalidDuration

_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:minutes?|mins?)\b", re.IGNORECASE)


def parse_duration(text: Any) -> Optional[int]:
    """
    Parse "2 hours 30 minutes", "1.5 hrs", "45 min" into whole minutes.
    Returns None when there is no text at all.
    """
    if not text or not isinstance(text, str):
        return None

    hours_match = _HOURS_RE.search(text)
    minutes_match = _MINUTES_RE.search(text)
    if hours_match is None and minutes_match is None:
        raise InvalidDuration(f"Invalid duration format: {text!r}")

    hours = float(hours_match.group(1)) if hours_match else 0.0
    minutes = float(minutes_match.group(1)) if minutes_match else 0.0

    # round half up
    return int(math.floor(hours * 60 + minutes + 0.5))
