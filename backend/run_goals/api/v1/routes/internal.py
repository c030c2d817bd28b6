"""
Internal API routes.

Protected by X-API-Key header (shared secret with the scheduler platform).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Header

from run_goals.config import settings
from run_goals.features.goals import AggregationWorkflow, run_goal_check
from .totals import get_workflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", tags=["Internal"])


# =============================================================================
# API Key Dependency
# =============================================================================

async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """Verify internal API key."""
    if not settings.internal_api_key:
        raise HTTPException(status_code=503, detail="Internal API not configured")
    if x_api_key != settings.internal_api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")
    return x_api_key


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/goal-check", dependencies=[Depends(verify_api_key)])
async def trigger_goal_check(workflow: AggregationWorkflow = Depends(get_workflow)):
    """
    Run the scheduled goal check now.

    Returns the operational summary. Per-user failures are counted,
    never raised.
    """
    result = await run_goal_check(workflow)
    if not result.ok:
        logger.error(f"Goal check failed: {result.error!r}")
        raise HTTPException(status_code=503, detail=result.error.to_dict())

    return result.value.to_dict()
