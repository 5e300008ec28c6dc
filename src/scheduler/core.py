"""Cron job lifecycle: arming, firing and re-arming delayed tasks."""

import inspect
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Union
from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging

from config import settings
from models import CronStatus, ParsedSchedule
from cron import parse_expression, matches, find_next_run
from .timer import DelayedTask, get_default_scheduler

logger = logging.getLogger(__name__)

Handler = Callable[[], Union[None, Awaitable[Any]]]


class CronJob:
    """A named handler fired on a cron schedule.

    Status moves between idle, running and paused only through ``start``,
    ``pause``, ``resume`` and ``stop``. At most one delayed task is pending
    at any time. Calls are not locked: drive a job from a single event loop.
    """

    def __init__(self, name: str, schedule: str, handler: Handler,
                 scheduler: Optional[AsyncIOScheduler] = None):
        """Create a job.

        Args:
            name: Job name used in logs
            schedule: Alias such as "@daily" or a 5/6-field expression
            handler: Zero-argument callable, sync or async
            scheduler: Scheduler to arm tasks on (default: shared scheduler)

        Raises:
            CronError: If the schedule is invalid; no job is created
        """
        self.name = name
        self.schedule_source = schedule
        self.schedule: ParsedSchedule = parse_expression(schedule).unwrap()
        self.handler = handler
        self._scheduler = scheduler
        self._status = CronStatus.IDLE
        self._pending: Optional[DelayedTask] = None

    def __repr__(self) -> str:
        return f"CronJob(name={self.name!r}, schedule={self.schedule_source!r}, status={self._status.value})"

    @property
    def pending_task(self) -> Optional[DelayedTask]:
        return self._pending

    def get_status(self) -> CronStatus:
        return self._status

    def matches(self, instant: datetime) -> bool:
        return matches(self.schedule, instant)

    def get_next_run(self, from_time: Optional[datetime] = None) -> Optional[datetime]:
        return find_next_run(self.schedule, from_time)

    def start(self):
        """Start firing. Only acts from idle; use ``resume`` when paused."""
        if self._status != CronStatus.IDLE:
            return

        self._status = CronStatus.RUNNING
        logger.info(f"Started cron job '{self.name}' ({self.schedule_source})")
        self._arm()

    def pause(self):
        if self._status != CronStatus.RUNNING:
            return

        self._status = CronStatus.PAUSED
        self._cancel_pending()
        logger.info(f"Paused cron job '{self.name}'")

    def resume(self):
        if self._status != CronStatus.PAUSED:
            return

        self._status = CronStatus.RUNNING
        logger.info(f"Resumed cron job '{self.name}'")
        self._arm()

    def stop(self):
        if self._status == CronStatus.IDLE:
            return

        self._status = CronStatus.IDLE
        self._cancel_pending()
        logger.info(f"Stopped cron job '{self.name}'")

    def _get_scheduler(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            self._scheduler = get_default_scheduler()
        return self._scheduler

    def _arm(self):
        """Arm a task for the next run, or a retry when none is in reach."""
        if self._status != CronStatus.RUNNING:
            return

        next_run = self.get_next_run()

        if next_run is None:
            logger.warning(
                f"No run for cron job '{self.name}' within the search horizon, "
                f"retrying in {settings.retry_delay_seconds}s"
            )
            self._pending = DelayedTask(
                self._get_scheduler(), self._retry, settings.retry_delay_seconds,
                name=f"{self.name} (retry)"
            )
            return

        delay = (next_run - datetime.now()).total_seconds()
        self._pending = DelayedTask(self._get_scheduler(), self._fire, delay, name=self.name)
        logger.debug(f"Cron job '{self.name}' next run at {next_run.isoformat()}")

    def _cancel_pending(self):
        if self._pending:
            self._pending.cancel()
            self._pending = None

    def _is_current(self, token: str) -> bool:
        return (
            self._status == CronStatus.RUNNING
            and self._pending is not None
            and self._pending.token == token
        )

    async def _retry(self, token: str):
        if not self._is_current(token):
            return

        self._cancel_pending()
        self._arm()

    async def _fire(self, token: str):
        """Run the handler for a fired task, then re-arm."""
        if not self._is_current(token):
            logger.debug(f"Ignoring stale fire for cron job '{self.name}'")
            return

        self._cancel_pending()
        logger.info(f"Executing cron job '{self.name}'")

        try:
            result = self.handler()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Cron job '{self.name}' handler error: {e}", exc_info=True)

        # pause/resume during the handler may already have armed a task
        if self._status == CronStatus.RUNNING and self._pending is None:
            self._arm()


def create(name: str, schedule: str, handler: Handler,
           scheduler: Optional[AsyncIOScheduler] = None) -> CronJob:
    """Create a cron job, raising CronError for an invalid schedule."""
    return CronJob(name, schedule, handler, scheduler=scheduler)
