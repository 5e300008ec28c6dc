"""Bounded forward search for the next matching instant."""

from datetime import datetime, time, timedelta
from typing import Iterator, Optional

from models import FieldName, ParsedSchedule
from .matcher import date_matches, to_local

# 366 days covers yearly schedules, including Feb 29 from within a leap year
HORIZON = timedelta(days=366)


def exists_locally(wall_clock: datetime) -> bool:
    """Check that a naive local time is not skipped by a DST transition."""
    return wall_clock.astimezone().replace(tzinfo=None) == wall_clock


def find_next_run(schedule: ParsedSchedule, from_time: Optional[datetime] = None) -> Optional[datetime]:
    """Find the first instant strictly after ``from_time`` that matches.

    The walk advances at the schedule's granularity (one second for
    six-field schedules, one minute otherwise), skipping whole days, hours
    or minutes that cannot match. Returns None when nothing matches within
    the horizon, e.g. for dates that never occur such as Feb 30.

    Args:
        schedule: Parsed schedule
        from_time: Search origin (default: now)

    Returns:
        Next matching datetime or None
    """
    origin = from_time or datetime.now()
    candidate = to_local(origin)

    if schedule.has_seconds:
        candidate = candidate.replace(microsecond=0) + timedelta(seconds=1)
    else:
        candidate = candidate.replace(second=0, microsecond=0) + timedelta(minutes=1)

    tick = timedelta(seconds=1) if schedule.has_seconds else timedelta(minutes=1)
    deadline = candidate + HORIZON

    while candidate < deadline:
        if not date_matches(schedule, candidate):
            candidate = datetime.combine(candidate.date() + timedelta(days=1), time())
        elif not schedule.allows(FieldName.HOUR, candidate.hour):
            candidate = candidate.replace(minute=0, second=0) + timedelta(hours=1)
        elif not schedule.allows(FieldName.MINUTE, candidate.minute):
            candidate = candidate.replace(second=0) + timedelta(minutes=1)
        elif schedule.has_seconds and not schedule.allows(FieldName.SECOND, candidate.second):
            candidate += timedelta(seconds=1)
        elif not exists_locally(candidate):
            # Inside a spring-forward gap
            candidate += tick
        else:
            if origin.tzinfo is not None:
                return candidate.astimezone(origin.tzinfo)
            return candidate

    return None


def iter_next_runs(schedule: ParsedSchedule, from_time: Optional[datetime] = None,
                   count: int = 5) -> Iterator[datetime]:
    """Yield up to ``count`` successive run times after ``from_time``."""
    current = from_time or datetime.now()
    for _ in range(count):
        current = find_next_run(schedule, current)
        if current is None:
            return
        yield current
