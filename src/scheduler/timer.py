"""Single-shot delayed tasks backed by APScheduler."""

import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Coroutine, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.executors.asyncio import AsyncIOExecutor
import logging

from config import settings

logger = logging.getLogger(__name__)

FireCallback = Callable[[str], Coroutine[Any, Any, None]]

_default_scheduler: Optional[AsyncIOScheduler] = None


def create_scheduler() -> AsyncIOScheduler:
    """Create an unstarted event loop scheduler configured from settings."""
    jobstores = {
        'default': MemoryJobStore()
    }

    executors = {
        'default': AsyncIOExecutor()
    }

    return AsyncIOScheduler(
        jobstores=jobstores,
        executors=executors,
        job_defaults=settings.scheduler_job_defaults
    )


def get_default_scheduler() -> AsyncIOScheduler:
    """Return the shared scheduler, starting it on the running event loop."""
    global _default_scheduler

    if _default_scheduler is None:
        _default_scheduler = create_scheduler()

    if not _default_scheduler.running:
        _default_scheduler.start()
        logger.info("Scheduler initialized and started")

    return _default_scheduler


def shutdown_default_scheduler():
    """Shutdown the shared scheduler, dropping any pending tasks."""
    global _default_scheduler

    if _default_scheduler and _default_scheduler.running:
        _default_scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")
    _default_scheduler = None


class DelayedTask:
    """A cancellable one-shot callback.

    The callback receives the task's token when it fires, so the owner can
    tell whether the fire still belongs to its current task.
    """

    def __init__(self, scheduler: AsyncIOScheduler, callback: FireCallback,
                 delay: float, name: str = ""):
        self.token = uuid.uuid4().hex
        self.delay = max(0.0, delay)
        self.run_date = datetime.now(scheduler.timezone) + timedelta(seconds=self.delay)
        self.cancelled = False
        self._scheduler = scheduler
        self._job_id = f"cron_{self.token}"

        scheduler.add_job(
            func=callback,
            trigger=DateTrigger(run_date=self.run_date),
            args=[self.token],
            id=self._job_id,
            name=name or self._job_id,
            replace_existing=True
        )
        logger.debug(f"Armed task {self._job_id} to fire in {self.delay:.3f}s")

    @property
    def job_id(self) -> str:
        return self._job_id

    def cancel(self):
        """Cancel the task if it has not fired yet."""
        if self.cancelled:
            return
        self.cancelled = True

        try:
            self._scheduler.remove_job(self._job_id)
            logger.debug(f"Cancelled task {self._job_id}")
        except JobLookupError:
            # Date-triggered jobs are removed from the store once fired
            pass
