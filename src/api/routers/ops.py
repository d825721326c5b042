import os
import logging
from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import DEFAULT_LLM_TIER, DEPLOYMENT_PROFILE

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "profile": DEPLOYMENT_PROFILE,
        "llm_provider": os.getenv("LLM_PROVIDER", "mock"),
        "llm_tier": DEFAULT_LLM_TIER,
    }


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
