from __future__ import annotations

import math
from typing import Any

from taskflow.models import DEFAULT_COMPLEXITY, as_mapping

BASE_SCORE = 5
MAX_DURATION_POINTS = 3
PRIORITY_WEIGHTS = {
    "urgent_important": 3,
    "urgent_not_important": 2,
    "not_urgent_important": 2,
    "not_urgent_not_important": 1,
}
DEADLINE_POINTS = 1
DESCRIPTION_POINTS = 1


def clamp_score(score: float) -> int:
    return max(1, min(int(math.floor(score + 0.5)), 10))


def determine_complexity(task: Any) -> int:
    """Score a task from 1 to 10.

    Base 5, up to 3 points for duration (one per hour), 1-3 for priority,
    one each for a deadline and a description.
    """
    data = as_mapping(task)
    if data is None:
        return DEFAULT_COMPLEXITY

    score = float(BASE_SCORE)

    duration = data.get("estimated_duration")
    if isinstance(duration, (int, float)) and not isinstance(duration, bool) and duration > 0:
        score += min(duration / 60, MAX_DURATION_POINTS)

    priority = data.get("priority")
    if isinstance(priority, str) and priority:
        score += PRIORITY_WEIGHTS.get(priority, 1)

    if data.get("deadline"):
        score += DEADLINE_POINTS
    if data.get("description"):
        score += DESCRIPTION_POINTS

    return clamp_score(score)
