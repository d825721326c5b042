from datetime import datetime
from typing import Optional

from extraction.task_extractor import TaskExtractor
from scheduling.sequencer import process_task_sequence
from validation.task_validator import validate_and_clean_tasks


class BackendAPI:
    """Central orchestration component: free text in, schedulable tasks out."""

    def parse_tasks(self, text: str, llm_tier: str = "large", now: Optional[datetime] = None) -> dict:
        """Runs the language model once, then the deterministic task pipeline."""

        # 1. Extract drafts from the instruction
        extractor = TaskExtractor()
        drafts = extractor.extract(text, llm_tier=llm_tier)

        # 2. Chain drafts in time and infer metadata
        sequenced = process_task_sequence(drafts, now=now)

        # 3. Final sanitation pass
        tasks = validate_and_clean_tasks(sequenced)

        return {
            "tasks": [t.model_dump(mode="json") for t in tasks],
            "tasks_processed": len(tasks),
        }
