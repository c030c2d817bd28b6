"""
Run Goals API

FastAPI application exposing aggregate totals and hosting the scheduled
goal check.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI

from run_goals import __version__
from run_goals.config import settings
from run_goals.db.session import init_models
from run_goals.api.v1.router import api_router
from run_goals.features.goals import GoalCheckRunner


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting Run Goals API...")
    await init_models()
    logger.info("Database initialized")

    runner = None
    if settings.goal_check_enabled:
        runner = GoalCheckRunner(interval_seconds=settings.goal_check_interval_seconds)
        await runner.start()
    app.state.goal_check_runner = runner

    yield

    # Shutdown
    if runner:
        await runner.stop()
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Run Goals API",
    description="Strava running totals and goal notifications",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
