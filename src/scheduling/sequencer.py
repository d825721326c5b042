from __future__ import annotations

import logging
from datetime import datetime, timedelta
from functools import partial, reduce
from typing import Any, List, NamedTuple, Optional, Tuple

from classification.complexity import determine_complexity
from classification.task_classifier import TaskClassifier
from parsing.duration import parse_duration
from parsing.time_phrase import resolve_time_phrase
from taskflow.models import EnergyLevel, EnrichedTask, TimeContext, TimeOfDay, as_mapping
from validation.task_validator import (
    clean_category,
    clean_complexity,
    clean_duration,
    clean_energy,
    clean_priority,
    clean_scheduled_date,
    clean_tags,
    clean_time_of_day,
    ensure_task_list,
    validate_task,
)

logger = logging.getLogger(__name__)


class _SequenceState(NamedTuple):
    cursor: datetime
    previous_duration: int
    tasks: Tuple[EnrichedTask, ...]


def energy_for_duration(minutes: int) -> EnergyLevel:
    if minutes > 120:
        return "high"
    if minutes <= 60:
        return "low"
    return "medium"


def time_of_day(moment: datetime) -> TimeOfDay:
    if moment.hour < 12:
        return "morning"
    if moment.hour >= 17:
        return "evening"
    return "afternoon"


def resolve_duration(draft: dict) -> int:
    """Explicit duration text wins over a numeric estimate; nothing at all means 0."""
    text = draft.get("duration_text") or draft.get("duration")
    parsed = parse_duration(text) if text else None
    if parsed:
        return parsed
    return clean_duration(draft.get("estimated_duration")) or 0


def _start_time(draft: dict, index: int, cursor: datetime) -> Tuple[datetime, Optional[str]]:
    phrase = draft.get("time_phrase")
    if not phrase or not isinstance(phrase, str):
        return cursor, None

    anchor = cursor if index > 0 else None
    resolved = resolve_time_phrase(phrase, anchor, now=cursor)
    if resolved < cursor:
        # never move the cursor backwards
        logger.info(
            f"Task at index {index} asked for {resolved.strftime('%H:%M')} ({phrase!r}), "
            f"starting at {cursor.strftime('%H:%M')} after the previous task"
        )
        return cursor, cursor.strftime("%H:%M")
    return resolved, resolved.strftime("%H:%M")


def _sequence_step(
    state: _SequenceState,
    item: Tuple[int, Any],
    *,
    now: datetime,
) -> _SequenceState:
    index, raw = item
    draft = as_mapping(raw)
    if draft is None:
        logger.warning(f"Invalid task at index {index}, using defaults")
        draft = {}

    cursor = state.cursor
    if index > 0 and state.previous_duration:
        cursor = cursor + timedelta(minutes=state.previous_duration)

    cursor, phrase_time = _start_time(draft, index, cursor)
    context = TimeContext(scheduled_time=cursor, is_sequential=index > 0)

    duration = resolve_duration(draft)
    inferred = TaskClassifier(now=now).classify(draft, context)
    explicit_priority = clean_priority(draft.get("priority"))
    priority = explicit_priority or inferred["priority"]

    validated = validate_task(draft)
    complexity = clean_complexity(draft.get("complexity_score"))
    if complexity is None:
        complexity = determine_complexity({
            "estimated_duration": duration,
            "priority": explicit_priority,
            "deadline": validated.deadline,
            "description": validated.description,
        })

    task = validated.model_copy(update={
        "estimated_duration": duration,
        "scheduled_date": clean_scheduled_date(draft.get("scheduled_date")) or cursor.isoformat(),
        "scheduled_time": validated.scheduled_time or phrase_time,
        "priority": priority,
        "category": clean_category(draft.get("category")) or inferred["category"],
        "complexity_score": complexity,
        "energy_required": clean_energy(draft.get("energy_required")) or energy_for_duration(duration),
        "best_time_of_day": clean_time_of_day(draft.get("best_time_of_day")) or time_of_day(cursor),
        "tags": clean_tags(draft.get("tags")) or inferred["tags"],
    })

    return _SequenceState(cursor=cursor, previous_duration=duration, tasks=state.tasks + (task,))


def process_task_sequence(drafts: Any, *, now: Optional[datetime] = None) -> List[EnrichedTask]:
    """Chain drafts one after another and enrich each with inferred metadata.

    Every task starts where the previous one ended: the cursor begins at `now`
    and advances by each resolved duration. Values supplied by the draft
    always take precedence over inferred ones. Time phrase and duration
    parsing errors propagate to the caller.
    """
    drafts = ensure_task_list(drafts)
    start = now or datetime.now().astimezone()

    initial = _SequenceState(cursor=start, previous_duration=0, tasks=())
    final = reduce(partial(_sequence_step, now=start), enumerate(drafts), initial)

    logger.debug(f"Sequenced {len(final.tasks)} task(s) from {start.isoformat()}")
    return list(final.tasks)
