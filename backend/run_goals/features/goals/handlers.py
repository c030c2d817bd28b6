"""
Entry point handlers.

Framework-free handlers driven by the triggers:
- run_goal_check(): scheduled trigger (background runner, CLI, internal API)
- query_totals(): on-demand trigger (GET /api/v1/totals, CLI)

Neither handler raises for per-user failures. A fatal error (credentials or
user directory unavailable) is reported as a failed Outcome / 503.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from run_goals.config import Settings, settings as default_settings
from run_goals.db.session import AsyncSessionLocal
from run_goals.features.secrets import SecretProvider, get_credential_store
from run_goals.features.strava import StravaApiClient, TokenRefresher
from run_goals.features.users import SqlAlchemyUserStore, UserRepository
from run_goals.shared.outcome import Outcome
from run_goals.shared.telegram import TelegramNotifier
from .workflow import AggregationWorkflow, WorkflowMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalCheckSummary:
    """Operational summary of one scheduled run."""
    succeeded: int
    failed: int
    notified: int
    skipped: int

    def to_dict(self) -> dict:
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "notified": self.notified,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class TotalsResponse:
    """HTTP-style result of the totals query."""
    status_code: int
    body: dict


def build_workflow(config: Optional[Settings] = None) -> AggregationWorkflow:
    """Wire the workflow with the production adapters."""
    config = config or default_settings
    return AggregationWorkflow(
        secret_provider=SecretProvider(get_credential_store(config)),
        refresher=TokenRefresher(
            token_url=config.strava_token_url,
            timeout=config.strava_timeout_seconds,
        ),
        stats_client=StravaApiClient(
            api_url=config.strava_api_url,
            timeout=config.strava_timeout_seconds,
        ),
        repository=UserRepository(SqlAlchemyUserStore(AsyncSessionLocal)),
        notifier=TelegramNotifier(config.telegram_bot_token),
        secret_name=config.strava_secret_name,
        max_concurrency=config.max_concurrency,
        deadline_seconds=config.invocation_deadline_seconds,
    )


async def run_goal_check(workflow: Optional[AggregationWorkflow] = None) -> Outcome[GoalCheckSummary]:
    """Evaluate goals for every user and send notifications."""
    workflow = workflow or build_workflow()
    result = await workflow.run(WorkflowMode.GOAL_CHECK)
    if not result.ok:
        return Outcome.failure(result.error)

    report = result.value
    return Outcome.success(GoalCheckSummary(
        succeeded=report.succeeded_count,
        failed=report.failed_count,
        notified=report.notified_count,
        skipped=report.skipped_count,
    ))


async def query_totals(workflow: Optional[AggregationWorkflow] = None) -> TotalsResponse:
    """
    Sum year-to-date miles and goals over all users.

    Returns:
        200 with {"totalMiles", "totalGoal", "failedCount"} on full or
        partial success, 503 with {"error", "detail"} on a fatal error
    """
    workflow = workflow or build_workflow()
    result = await workflow.run(WorkflowMode.AGGREGATE_QUERY)
    if not result.ok:
        return TotalsResponse(status_code=503, body=result.error.to_dict())

    report = result.value
    return TotalsResponse(status_code=200, body={
        "totalMiles": report.total_miles,
        "totalGoal": report.total_goal,
        "failedCount": report.failed_count,
    })
