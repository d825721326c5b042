from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str, model: Optional[str] = None) -> str:
        """
        Must return the raw model output as TEXT.
        JSON extraction and draft validation happen in LLMClient.
        """
        raise NotImplementedError
