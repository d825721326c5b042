from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from taskflow.models import DEFAULT_CATEGORY, DEFAULT_PRIORITY, Priority, TimeContext, as_mapping

URGENCY_WINDOW = timedelta(hours=24)

IMPORTANT_KEYWORDS: Tuple[str, ...] = ("important", "critical", "essential", "key", "crucial")

# Order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Work", (
        "work", "project", "meeting", "deadline", "presentation", "report",
        "email", "client", "website", "coding", "development",
    )),
    ("Health", (
        "exercise", "workout", "gym", "yoga", "meditation", "doctor",
        "health", "fitness", "sport", "badminton", "tennis", "running",
    )),
    ("Personal", (
        "hobby", "leisure", "read", "shopping", "family", "friend",
        "social", "entertainment", "relax", "break",
    )),
    ("Study", (
        "study", "learn", "course", "homework", "research", "assignment",
        "class", "practice",
    )),
    ("Errands", ("errands", "shopping", "groceries", "appointment", "reservation")),
)

TAG_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Work", ("work", "project", "website", "coding", "development")),
    ("Health", ("health", "fitness", "exercise", "sport", "badminton")),
    ("Technology", ("computer", "software", "coding", "website", "development")),
    ("Social", ("social", "friends", "family", "team")),
    ("Personal", ("personal", "self", "hobby", "leisure")),
)


def task_text(task: Dict[str, Any]) -> str:
    title = task.get("title")
    description = task.get("description")
    title = title if isinstance(title, str) else ""
    description = description if isinstance(description, str) else ""
    return f"{title} {description}".lower()


def determine_task_priority(
    task: Any,
    time_context: Optional[TimeContext],
    *,
    now: Optional[datetime] = None,
) -> Priority:
    """Eisenhower quadrant from schedule proximity and importance keywords."""
    data = as_mapping(task)
    if data is None or time_context is None:
        return DEFAULT_PRIORITY

    scheduled = time_context.scheduled_time
    now = now or datetime.now(scheduled.tzinfo if scheduled else None)
    is_urgent = scheduled is not None and scheduled - now <= URGENCY_WINDOW

    text = task_text(data)
    is_important = any(keyword in text for keyword in IMPORTANT_KEYWORDS)

    if is_urgent and is_important:
        return "urgent_important"
    if is_urgent:
        return "urgent_not_important"
    if is_important:
        return "not_urgent_important"
    return "not_urgent_not_important"


def determine_task_category(task: Any) -> str:
    data = as_mapping(task)
    if data is None:
        return DEFAULT_CATEGORY

    text = task_text(data)
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def extract_tags(task: Any) -> List[str]:
    """Own category first, then every known tag keyword found in the text."""
    data = as_mapping(task)
    if data is None:
        return []

    text = task_text(data)
    tags: Dict[str, None] = {}

    category = data.get("category")
    if isinstance(category, str) and category.strip():
        tags[category.strip().lower()] = None

    for _group, keywords in TAG_KEYWORDS:
        for keyword in keywords:
            if keyword in text:
                tags.setdefault(keyword, None)

    return list(tags)


class TaskClassifier:
    """Rule-based classification of a single draft: priority, category, tags."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now

    def classify(self, task: Any, time_context: Optional[TimeContext] = None) -> dict:
        return {
            "priority": determine_task_priority(task, time_context, now=self.now),
            "category": determine_task_category(task),
            "tags": extract_tags(task),
        }
