import logging

from fastapi import FastAPI

from api.routers import ops, tasks

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="taskflow")
app.include_router(tasks.router)
app.include_router(ops.router)

logger.info("Task parsing API ready")
