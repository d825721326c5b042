from __future__ import annotations
from typing import Any, List
from pydantic import BaseModel, Field


class DraftExtractionResult(BaseModel):
    """Envelope the model is asked to answer with: {"tasks": [...]}."""
    tasks: List[Any] = Field(default_factory=list)
