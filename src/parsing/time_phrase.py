from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from taskflow.errors import InvalidHour, InvalidMinute, InvalidTimePhrase, MissingAnchorTime

_NEXT_RE = re.compile(r"\bnext\b", re.IGNORECASE)
_AFTER_RE = re.compile(r"\bafter\b", re.IGNORECASE)
_IN_RE = re.compile(r"\bin\s+(\d+)\s+(hours?|minutes?)\b", re.IGNORECASE)
_AT_RE = re.compile(r"\bat\s+(\d+)(?::(\d+))?\s*(am|pm)?\b", re.IGNORECASE)


def resolve_time_phrase(
    phrase: str,
    anchor: Optional[datetime] = None,
    *,
    now: Optional[datetime] = None,
) -> datetime:
    """Turn a phrase like "in 2 hours", "at 3:30pm" or "next" into a datetime.

    `anchor` is the end of the previous task when chaining; `now` is the clock
    used when there is no anchor.
    """
    if not phrase or not isinstance(phrase, str):
        raise InvalidTimePhrase("Invalid time phrase provided")

    if _NEXT_RE.search(phrase):
        if anchor is not None:
            return anchor
        raise MissingAnchorTime("'next' used without previous task time")

    # "after" means immediately following the anchor, no delay is added.
    if anchor is not None and _AFTER_RE.search(phrase):
        return anchor

    base = anchor if anchor is not None else (now or datetime.now())

    m = _IN_RE.search(phrase)
    if m:
        amount = int(m.group(1))
        if m.group(2).lower().startswith("hour"):
            return base + timedelta(hours=amount)
        return base + timedelta(minutes=amount)

    m = _AT_RE.search(phrase)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2)) if m.group(2) else 0
        meridiem = (m.group(3) or "").lower()

        if hour < 1 or hour > 12:
            raise InvalidHour("Invalid hour value in time phrase")
        if minute < 0 or minute > 59:
            raise InvalidMinute("Invalid minute value in time phrase")

        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0

        return base.replace(hour=hour, minute=minute, second=0, microsecond=0)

    return base
