import logging
from typing import Any, Optional

from llm.llm_client import LLMClient

logger = logging.getLogger(__name__)


class TaskExtractor:

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm_client = llm_client

    def extract(self, text: str, llm_tier: str = "large") -> list[Any]:
        """Free text -> ordered list of task drafts (dicts), as returned by the model."""
        llm = self.llm_client or LLMClient()
        drafts = llm.extract_tasks(text, model_tier=llm_tier)
        logger.info(f"Extracted {len(drafts)} draft(s) with tier {llm_tier}")
        return drafts
