from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from classification.complexity import clamp_score
from taskflow.errors import InvalidTasksArray
from taskflow.models import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_COMPLEXITY,
    DEFAULT_ENERGY,
    DEFAULT_PRIORITY,
    ENERGY_LEVELS,
    PRIORITIES,
    TIMES_OF_DAY,
    EnrichedTask,
    as_mapping,
)

logger = logging.getLogger(__name__)

_DATETIME = TypeAdapter(datetime)
_CATEGORY_LOOKUP = {c.lower(): c for c in CATEGORIES}


def ensure_task_list(tasks: Any) -> Sequence:
    if isinstance(tasks, (str, bytes, bytearray)) or not isinstance(tasks, Sequence):
        raise InvalidTasksArray("Tasks must be an array")
    return tasks


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _choice(value: Any, allowed: tuple) -> Optional[str]:
    if not isinstance(value, str):
        return None
    v = value.strip().lower()
    return v if v in allowed else None


def clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def clean_priority(value: Any) -> Optional[str]:
    return _choice(value, PRIORITIES)


def clean_energy(value: Any) -> Optional[str]:
    return _choice(value, ENERGY_LEVELS)


def clean_time_of_day(value: Any) -> Optional[str]:
    return _choice(value, TIMES_OF_DAY)


def clean_category(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return _CATEGORY_LOOKUP.get(value.strip().lower())


def clean_duration(value: Any) -> Optional[int]:
    """Non-negative whole minutes, or None when the value is unusable."""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not _is_number(value) or not math.isfinite(value) or value < 0:
        return None
    return int(value + 0.5)


def clean_complexity(value: Any) -> Optional[int]:
    if not _is_number(value) or not math.isfinite(value):
        return None
    return clamp_score(value)


def clean_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, (str, datetime)) or not value:
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        return None


def clean_scheduled_date(value: Any) -> Optional[str]:
    parsed = clean_datetime(value)
    return parsed.isoformat() if parsed is not None else None


def clean_scheduled_time(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def clean_tags(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    seen: dict = {}
    for tag in value:
        if not isinstance(tag, str):
            continue
        t = tag.strip().lower()
        if t:
            seen.setdefault(t, None)
    return list(seen)


def validate_task(task: Any) -> EnrichedTask:
    """Sanitize one task; anything that is not a mapping becomes an all-defaults record."""
    data = as_mapping(task)
    if data is None:
        return EnrichedTask()

    duration = clean_duration(data.get("estimated_duration"))
    complexity = clean_complexity(data.get("complexity_score"))

    return EnrichedTask(
        title=clean_text(data.get("title")),
        description=clean_text(data.get("description")),
        priority=clean_priority(data.get("priority")) or DEFAULT_PRIORITY,
        estimated_duration=duration if duration is not None else 0,
        deadline=clean_datetime(data.get("deadline")),
        scheduled_date=clean_scheduled_date(data.get("scheduled_date")),
        scheduled_time=clean_scheduled_time(data.get("scheduled_time")),
        best_time_of_day=clean_time_of_day(data.get("best_time_of_day")),
        energy_required=clean_energy(data.get("energy_required")) or DEFAULT_ENERGY,
        complexity_score=complexity if complexity is not None else DEFAULT_COMPLEXITY,
        category=clean_category(data.get("category")) or DEFAULT_CATEGORY,
        tags=clean_tags(data.get("tags")),
    )


def validate_and_clean_tasks(tasks: Any) -> List[EnrichedTask]:
    """Sanitize a batch of tasks. Only a non-sequence input raises."""
    tasks = ensure_task_list(tasks)
    cleaned = [validate_task(task) for task in tasks]
    defaulted = sum(1 for task in tasks if as_mapping(task) is None)
    if defaulted:
        logger.info(f"Replaced {defaulted} malformed task(s) with defaults")
    return cleaned
