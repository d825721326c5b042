import asyncio
import logging
import time
from typing import Any, Literal, Optional

from pydantic import BaseModel
from fastapi import APIRouter, Depends, HTTPException

from api.backend import BackendAPI
from api.dependencies import get_backend, get_llm_tier
from api.metrics import LLM_TIER_TOTAL, TASKS_PARSED_TOTAL, observe_request
from scheduling.sequencer import process_task_sequence
from taskflow.errors import LLMError, TaskParsingError
from validation.task_validator import validate_and_clean_tasks

router = APIRouter()
logger = logging.getLogger(__name__)


class ParseTaskIn(BaseModel):
    input: str
    llm_tier: Optional[Literal["small", "large"]] = None


class TasksIn(BaseModel):
    tasks: Any = None


def _parsing_failed(endpoint: str, start: float, err: TaskParsingError) -> HTTPException:
    observe_request(endpoint, "rejected", time.time() - start)
    logger.info(f"{endpoint}: rejected input ({err.code}): {err}")
    return HTTPException(status_code=422, detail={"error": str(err), "code": err.code})


@router.post("/ai/parse-task")
async def parse_task(payload: ParseTaskIn, backend: BackendAPI = Depends(get_backend)) -> dict:
    """Free-form instruction -> ordered, enriched tasks."""
    endpoint = "/ai/parse-task"
    start = time.time()

    text = payload.input.strip()
    if not text:
        observe_request(endpoint, "rejected", time.time() - start)
        raise HTTPException(status_code=400, detail="Input text is required")

    llm_tier = get_llm_tier(payload.llm_tier)
    LLM_TIER_TOTAL.labels(tier=llm_tier).inc()
    logger.info(f"Parsing instruction (tier: {llm_tier}): {text[:50]}...")

    try:
        result = await asyncio.to_thread(backend.parse_tasks, text, llm_tier=llm_tier)
    except TaskParsingError as e:
        raise _parsing_failed(endpoint, start, e)
    except LLMError as e:
        observe_request(endpoint, "failed", time.time() - start)
        logger.error(f"Language model failed: {e}")
        raise HTTPException(status_code=502, detail="Failed to parse input with the language model")

    TASKS_PARSED_TOTAL.inc(result["tasks_processed"])
    observe_request(endpoint, "processed", time.time() - start)
    logger.info(f"Parsed {result['tasks_processed']} task(s)")
    return {"success": True, "tasks": result["tasks"]}


@router.post("/tasks/sequence")
async def sequence_tasks(payload: TasksIn) -> dict:
    """Sequence drafts the client already has (no language model involved)."""
    endpoint = "/tasks/sequence"
    start = time.time()
    try:
        tasks = validate_and_clean_tasks(process_task_sequence(payload.tasks))
    except TaskParsingError as e:
        raise _parsing_failed(endpoint, start, e)

    observe_request(endpoint, "processed", time.time() - start)
    return {"success": True, "tasks": [t.model_dump(mode="json") for t in tasks]}


@router.post("/tasks/validate")
async def validate_tasks(payload: TasksIn) -> dict:
    """Sanitize tasks coming from a client that bypassed the sequencer."""
    endpoint = "/tasks/validate"
    start = time.time()
    try:
        tasks = validate_and_clean_tasks(payload.tasks)
    except TaskParsingError as e:
        raise _parsing_failed(endpoint, start, e)

    observe_request(endpoint, "processed", time.time() - start)
    return {"success": True, "tasks": [t.model_dump(mode="json") for t in tasks]}
