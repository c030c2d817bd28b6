"""
Aggregation Workflow.

Iterates all users, refreshes expired tokens, fetches running totals,
evaluates goals and folds everything into one AggregateReport.

Per user (independently):
1. Access token missing or expired (now >= expires_at):
   refresh, then persist the new token triple BEFORE using it.
   Refresh or persist failure -> user failed, batch continues.
2. Fetch stats. Failure -> user failed, batch continues.
3. Add year-to-date miles (and goal, if set) to the totals.
   In GOAL_CHECK mode send a notification when ytd >= goal.

Fatal (no user is processed): credentials cannot be loaded, user directory
cannot be read.

Users are processed with bounded fan-out. Each task returns an immutable
UserResult; totals are reduced once after all tasks finish.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from run_goals.features.secrets import Credentials, SecretProvider
from run_goals.features.strava import StravaApiClient, TokenRefresher
from run_goals.features.users import UserRecord, UserRepository
from run_goals.shared.errors import RunGoalsError
from run_goals.shared.outcome import Outcome
from run_goals.shared.telegram import NotificationSender

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================

class WorkflowMode(str, Enum):
    """Invocation mode."""
    GOAL_CHECK = "goal_check"            # scheduled: notify users who met their goal
    AGGREGATE_QUERY = "aggregate_query"  # on demand: totals only


class UserStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"  # not attempted, deadline exhausted


class FailureStage(str, Enum):
    REFRESH = "refresh"
    PERSIST = "persist"
    STATS = "stats"


@dataclass(frozen=True)
class UserFailure:
    """Why one user could not be processed."""
    athlete_id: int
    stage: FailureStage
    kind: str
    message: str


@dataclass(frozen=True)
class UserResult:
    """Result of processing one user."""
    athlete_id: int
    status: UserStatus
    miles: float = 0.0
    goal: Optional[float] = None
    goal_met: bool = False
    notified: bool = False
    failure: Optional[UserFailure] = None


@dataclass
class AggregateReport:
    """Totals over all successfully fetched users."""
    total_miles: float = 0.0
    total_goal: float = 0.0
    succeeded_count: int = 0
    failed_count: int = 0
    goal_met_count: int = 0
    notified_count: int = 0
    skipped_count: int = 0
    failures: list[UserFailure] = field(default_factory=list)

    @classmethod
    def reduce(cls, results: list[UserResult]) -> "AggregateReport":
        """Fold per-user results into a report."""
        report = cls()
        for result in results:
            if result.status == UserStatus.SKIPPED:
                report.skipped_count += 1
                continue
            if result.status == UserStatus.FAILED:
                report.failed_count += 1
                report.failures.append(result.failure)
                continue

            report.succeeded_count += 1
            report.total_miles += result.miles
            if result.goal is not None:
                report.total_goal += result.goal
            if result.goal_met:
                report.goal_met_count += 1
            if result.notified:
                report.notified_count += 1
        return report


def goal_met(miles: float, goal: Optional[float]) -> bool:
    """Meets-or-exceeds comparison; users without a goal never meet it."""
    return goal is not None and miles >= goal


# =============================================================================
# Workflow
# =============================================================================

class AggregationWorkflow:
    """
    Goal evaluation and aggregation over the whole user directory.

    Usage:
        workflow = AggregationWorkflow(
            secret_provider=SecretProvider(get_credential_store()),
            refresher=TokenRefresher(),
            stats_client=StravaApiClient(),
            repository=UserRepository(SqlAlchemyUserStore(AsyncSessionLocal)),
            notifier=TelegramNotifier(),
        )
        result = await workflow.run(WorkflowMode.AGGREGATE_QUERY)
    """

    NOTIFICATION_SUBJECT = "Goal reached!"

    def __init__(
        self,
        secret_provider: SecretProvider,
        refresher: TokenRefresher,
        stats_client: StravaApiClient,
        repository: UserRepository,
        notifier: Optional[NotificationSender] = None,
        secret_name: str = "strava",
        max_concurrency: int = 5,
        deadline_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.secret_provider = secret_provider
        self.refresher = refresher
        self.stats_client = stats_client
        self.repository = repository
        self.notifier = notifier
        self.secret_name = secret_name
        self.max_concurrency = max_concurrency
        self.deadline_seconds = deadline_seconds
        self._clock = clock
        self._monotonic = monotonic

    async def run(self, mode: WorkflowMode) -> Outcome[AggregateReport]:
        """
        Process every user once.

        Returns:
            Outcome with AggregateReport, or the fatal error
            (SecretError / RepositoryError) when nothing could be processed
        """
        started = self._monotonic()

        creds_result = await self.secret_provider.load_credentials(self.secret_name)
        if not creds_result.ok:
            logger.error(f"Cannot load Strava credentials: {creds_result.error!r}")
            return Outcome.failure(creds_result.error)
        credentials = creds_result.value

        users_result = await self.repository.list_users()
        if not users_result.ok:
            logger.error(f"Cannot read user directory: {users_result.error!r}")
            return Outcome.failure(users_result.error)
        users = users_result.value

        logger.info(f"Starting {mode.value} for {len(users)} users")

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(user: UserRecord) -> UserResult:
            async with semaphore:
                if self._deadline_exhausted(started):
                    return UserResult(athlete_id=user.athlete_id, status=UserStatus.SKIPPED)
                return await self.process_user(user, credentials, mode)

        results = await asyncio.gather(*(_bounded(user) for user in users))
        report = AggregateReport.reduce(list(results))

        logger.info(
            f"Finished {mode.value}: succeeded={report.succeeded_count} "
            f"failed={report.failed_count} goal_met={report.goal_met_count} "
            f"notified={report.notified_count} "
            f"skipped={report.skipped_count}"
        )
        return Outcome.success(report)

    async def process_user(
        self,
        user: UserRecord,
        credentials: Credentials,
        mode: WorkflowMode
    ) -> UserResult:
        """Refresh (if needed), fetch stats and evaluate the goal for one user."""
        access_token = user.access_token

        if user.token_expired(self._clock()):
            logger.info(f"Refreshing Strava token for athlete {user.athlete_id}")
            refresh_result = await self.refresher.refresh(credentials, user.refresh_token)
            if not refresh_result.ok:
                return self._failed(user, FailureStage.REFRESH, refresh_result.error)
            grant = refresh_result.value

            # Strava rotates refresh tokens: the old one is dead from here on.
            persist_result = await self.repository.update_user(user.athlete_id, {
                "access_token": grant.access_token,
                "refresh_token": grant.refresh_token,
                "expires_at": grant.expires_at,
            })
            if not persist_result.ok:
                logger.error(
                    f"Rotated Strava grant for athlete {user.athlete_id} was lost: "
                    "it could not be saved and the stored refresh token may no longer be valid"
                )
                return self._failed(user, FailureStage.PERSIST, persist_result.error)
            access_token = grant.access_token

        stats_result = await self.stats_client.get_user_stats(user.athlete_id, access_token)
        if not stats_result.ok:
            return self._failed(user, FailureStage.STATS, stats_result.error)

        miles = stats_result.value.ytd_run_totals or 0.0
        met = goal_met(miles, user.goal)

        notified = False
        if met and mode == WorkflowMode.GOAL_CHECK:
            notified = await self._notify(user, miles)

        return UserResult(
            athlete_id=user.athlete_id,
            status=UserStatus.SUCCEEDED,
            miles=miles,
            goal=user.goal,
            goal_met=met,
            notified=notified,
        )

    async def _notify(self, user: UserRecord, miles: float) -> bool:
        if self.notifier is None:
            logger.warning("Goal met but no notifier configured")
            return False
        if user.telegram_chat_id is None:
            logger.info(f"Athlete {user.athlete_id} met the goal but has no notification recipient")
            return False

        body = (
            f"You have run {miles:.1f} miles this year "
            f"and reached your goal of {user.goal:g} miles. Keep it up!"
        )
        sent = await self.notifier.send(user.telegram_chat_id, self.NOTIFICATION_SUBJECT, body)
        if not sent:
            logger.warning(f"Goal notification for athlete {user.athlete_id} was not delivered")
        return sent

    def _failed(self, user: UserRecord, stage: FailureStage, error: RunGoalsError) -> UserResult:
        logger.warning(f"Athlete {user.athlete_id} failed at {stage.value}: {error!r}")
        return UserResult(
            athlete_id=user.athlete_id,
            status=UserStatus.FAILED,
            failure=UserFailure(
                athlete_id=user.athlete_id,
                stage=stage,
                kind=error.kind,
                message=error.message,
            ),
        )

    def _deadline_exhausted(self, started: float) -> bool:
        if self.deadline_seconds is None:
            return False
        return self._monotonic() - started >= self.deadline_seconds
