"""
Background goal check runner.

Runs the scheduled goal check on a fixed interval inside the API process.
Cron-style platforms can use `run-goals goal-check` instead.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from run_goals.shared.outcome import Outcome
from .handlers import GoalCheckSummary, run_goal_check

logger = logging.getLogger(__name__)

GoalCheck = Callable[[], Awaitable[Outcome[GoalCheckSummary]]]


class GoalCheckRunner:
    """
    Periodic goal check.

    Call `start()` to begin.
    Call `stop()` to gracefully stop.

    Usage:
        runner = GoalCheckRunner(interval_seconds=86400)
        await runner.start()
        # ... later ...
        await runner.stop()
    """

    def __init__(self, interval_seconds: float, goal_check: GoalCheck = run_goal_check):
        self.interval_seconds = interval_seconds
        self._goal_check = goal_check
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self.last_summary: Optional[GoalCheckSummary] = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Goal check runner started (every {self.interval_seconds}s)")

    async def stop(self):
        """Stop the background loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Goal check runner stopped")

    async def run_once(self) -> Optional[GoalCheckSummary]:
        """Run one goal check. Returns None when the run was fatal."""
        result = await self._goal_check()
        if not result.ok:
            logger.error(f"Goal check failed: {result.error!r}")
            return None

        self.last_summary = result.value
        logger.info(f"Goal check complete: {result.value.to_dict()}")
        return result.value

    async def _run_loop(self):
        """Main loop. First run happens one interval after start."""
        while self._running:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except Exception as e:
                logger.exception(f"Goal check crashed: {e}")
