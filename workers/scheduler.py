# =============================================================================
# workers/scheduler.py - In-Process Daily Question Scheduler
# =============================================================================
# Runs the daily question job once a day (UTC) inside the API process as a
# supervised asyncio task. The task owns its error boundary: a failing run
# is logged and the loop keeps going, so nothing here can reach a request.
#
# Deployments that run Celery beat instead set DAILY_QUESTIONS_ENABLED=false
# (see workers/config.py for the beat schedule).
#
# Usage:
#   scheduler = DailyQuestionScheduler(database, hour=0, minute=0)
#   scheduler.start()     # in lifespan startup
#   await scheduler.stop()  # in lifespan shutdown
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Awaitable, Callable

from core.services.daily_question_service import DailyQuestionService
from lib.supabase_client import Database
from lib.utils import utc_now

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)

# Fallback wait when the next run time cannot be computed
RETRY_DELAY = 3600.0


def seconds_until_next_run(now: datetime, hour: int, minute: int) -> float:
    """
    Seconds from `now` until the next `hour:minute` (same timezone as `now`).

    A run time equal to `now` counts as passed and rolls over to tomorrow.

    Example:
        seconds_until_next_run(datetime(2024, 1, 15, 23, 0), 0, 0)  # 3600.0
    """
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class DailyQuestionScheduler:
    """
    Supervised background loop for the daily question job.

    Args:
        database: Handle the job reads and writes through
        hour, minute: UTC time of the daily run
        count: Questions picked per day
        run_on_startup: Also run once as soon as the loop starts
        clock: Returns the current UTC time
        sleep: Awaitable delay; both are swapped out in tests
    """

    def __init__(
        self,
        database: Database,
        hour: int = 0,
        minute: int = 0,
        count: int = 3,
        run_on_startup: bool = True,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.database = database
        self.hour = hour
        self.minute = minute
        self.count = count
        self.run_on_startup = run_on_startup
        self.clock = clock
        self.sleep = sleep
        self._task: asyncio.Task | None = None
        self.runs = 0
        self.failures = 0

    @classmethod
    def from_settings(cls, settings: Settings, database: Database) -> DailyQuestionScheduler:
        return cls(
            database,
            hour=settings.DAILY_QUESTIONS_HOUR,
            minute=settings.DAILY_QUESTIONS_MINUTE,
            count=settings.DAILY_QUESTIONS_COUNT,
            run_on_startup=settings.DAILY_QUESTIONS_RUN_ON_STARTUP,
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_job(self) -> list[dict]:
        """One synchronous run of the job. Blocks on the database."""
        return DailyQuestionService(self.database).set_daily_questions(
            self.clock().date(), count=self.count
        )

    async def run_once(self) -> bool:
        """
        Run the job in a worker thread, logging instead of raising.

        Returns:
            True if the run succeeded
        """
        self.runs += 1
        try:
            rows = await asyncio.to_thread(self.run_job)
        except Exception as e:
            self.failures += 1
            logger.exception(f"Daily question job failed: {e}")
            return False
        logger.info(f"Daily question job finished: {len(rows)} question(s)")
        return True

    def next_delay(self) -> float:
        """Seconds until the next run, or RETRY_DELAY if that cannot be worked out."""
        try:
            return seconds_until_next_run(self.clock(), self.hour, self.minute)
        except Exception as e:
            logger.exception(f"Could not schedule the next daily question run: {e}")
            return RETRY_DELAY

    async def _loop(self) -> None:
        if self.run_on_startup:
            await self.run_once()
        while True:
            delay = self.next_delay()
            logger.debug(f"Next daily question run in {delay:.0f}s")
            await self.sleep(delay)
            await self.run_once()

    def start(self) -> asyncio.Task:
        """Start the loop on the running event loop. Idempotent."""
        if self.running:
            return self._task
        logger.info(f"Daily question scheduler started ({self.hour:02d}:{self.minute:02d} UTC, {self.count}/day)")
        self._task = asyncio.create_task(self._loop(), name="daily-question-scheduler")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Daily question scheduler stopped")
