"""
Totals API route.

Aggregate year-to-date miles and goals across all users.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from run_goals.features.goals import AggregationWorkflow, build_workflow, query_totals

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================

class TotalsResponseBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_miles: float = Field(alias="totalMiles")
    total_goal: float = Field(alias="totalGoal")
    failed_count: int = Field(alias="failedCount")


class ErrorBody(BaseModel):
    error: str
    detail: str


# =============================================================================
# Dependencies
# =============================================================================

def get_workflow() -> AggregationWorkflow:
    """Fresh workflow per request; credentials are loaded per invocation."""
    return build_workflow()


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/totals",
    response_model=TotalsResponseBody,
    responses={503: {"model": ErrorBody}},
)
async def get_totals(workflow: AggregationWorkflow = Depends(get_workflow)):
    """
    Sum of year-to-date miles and goals over all users.

    Users whose token refresh or stats fetch failed are left out of the sums
    and counted in `failedCount`.
    """
    result = await query_totals(workflow)
    if result.status_code != 200:
        logger.error(f"Totals query failed: {result.body}")
    return JSONResponse(status_code=result.status_code, content=result.body)
