import os

from api.backend import BackendAPI

# Configuration
DEFAULT_LLM_TIER = os.getenv("DEFAULT_LLM_TIER", "large").strip().lower()
if DEFAULT_LLM_TIER not in {"small", "large"}:
    DEFAULT_LLM_TIER = "large"

DEPLOYMENT_PROFILE = os.getenv("DEPLOYMENT_PROFILE", "unknown")

backend = BackendAPI()


def get_backend() -> BackendAPI:
    return backend


def get_llm_tier(requested: str | None = None) -> str:
    return requested or DEFAULT_LLM_TIER
