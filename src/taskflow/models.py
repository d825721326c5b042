from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Optional, List, Union

from pydantic import BaseModel, ConfigDict, Field


Priority = Literal[
    "urgent_important",
    "urgent_not_important",
    "not_urgent_important",
    "not_urgent_not_important",
]
EnergyLevel = Literal["low", "medium", "high"]
TimeOfDay = Literal["morning", "afternoon", "evening"]
Category = Literal["Work", "Health", "Personal", "Study", "Errands", "Other"]

PRIORITIES: tuple = (
    "urgent_important",
    "urgent_not_important",
    "not_urgent_important",
    "not_urgent_not_important",
)
ENERGY_LEVELS: tuple = ("low", "medium", "high")
TIMES_OF_DAY: tuple = ("morning", "afternoon", "evening")
CATEGORIES: tuple = ("Work", "Health", "Personal", "Study", "Errands", "Other")

DEFAULT_PRIORITY: Priority = "not_urgent_not_important"
DEFAULT_ENERGY: EnergyLevel = "medium"
DEFAULT_CATEGORY: Category = "Other"
DEFAULT_COMPLEXITY = 5


class TaskDraft(BaseModel):
    """
    Loosely-typed task as produced by the language model.
    Example: {"title": "Gym", "duration_text": "1 hour", "time_phrase": "at 7am"}
    """
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    duration_text: Optional[str] = None
    duration: Optional[Union[str, int, float]] = None
    estimated_duration: Optional[Union[int, float]] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    deadline: Optional[Any] = None
    time_phrase: Optional[str] = None
    scheduled_date: Optional[Any] = None
    scheduled_time: Optional[str] = None
    complexity_score: Optional[Union[int, float]] = None
    energy_required: Optional[str] = None
    best_time_of_day: Optional[str] = None


class EnrichedTask(BaseModel):
    title: str = ""
    description: str = ""
    priority: Priority = DEFAULT_PRIORITY

    estimated_duration: int = Field(0, ge=0)

    deadline: Optional[datetime] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None

    best_time_of_day: Optional[TimeOfDay] = None
    energy_required: EnergyLevel = DEFAULT_ENERGY
    complexity_score: int = Field(DEFAULT_COMPLEXITY, ge=1, le=10)

    category: Category = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class TimeContext:
    """Per-task scheduling context, only alive while a sequence is processed."""

    scheduled_time: Optional[datetime] = None
    is_sequential: bool = False


def as_mapping(obj: Any) -> Optional[Dict[str, Any]]:
    """Plain dict view of a draft (dict or pydantic model); None for anything else."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(exclude_none=True)
    if isinstance(obj, Mapping):
        return dict(obj)
    return None
