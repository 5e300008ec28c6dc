"""Lifecycle status of a cron job."""

from enum import Enum


class CronStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
