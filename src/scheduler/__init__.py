"""Cron job scheduling on an asyncio event loop."""

from .core import CronJob, create
from .timer import DelayedTask, create_scheduler, get_default_scheduler, shutdown_default_scheduler

__all__ = [
    "CronJob",
    "create",
    "DelayedTask",
    "create_scheduler",
    "get_default_scheduler",
    "shutdown_default_scheduler"
]
