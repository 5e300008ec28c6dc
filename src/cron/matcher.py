"""Match predicate for parsed cron schedules."""

from datetime import datetime

from models import FieldName, ParsedSchedule


def to_local(instant: datetime) -> datetime:
    """Return the naive local wall-clock time for an instant.

    Naive datetimes are taken as local time already; aware ones are
    converted to the system zone first.
    """
    if instant.tzinfo is not None:
        return instant.astimezone().replace(tzinfo=None)
    return instant


def cron_weekday(instant: datetime) -> int:
    """Day of week with 0 = Sunday, as used by cron."""
    return instant.isoweekday() % 7


def date_matches(schedule: ParsedSchedule, instant: datetime) -> bool:
    return (
        schedule.allows(FieldName.DAY, instant.day)
        and schedule.allows(FieldName.MONTH, instant.month)
        and schedule.allows(FieldName.WEEKDAY, cron_weekday(instant))
    )


def matches(schedule: ParsedSchedule, instant: datetime) -> bool:
    """Check whether an instant satisfies a schedule.

    Every component must be permitted by its field. Day-of-month and
    day-of-week are combined with AND: ``0 0 13 * 5`` only fires on a
    Friday the 13th, unlike cron dialects that OR the two fields when both
    are restricted.

    Args:
        schedule: Parsed schedule
        instant: Time to test, in local wall-clock time

    Returns:
        True if the instant matches
    """
    local = to_local(instant)

    if schedule.has_seconds and not schedule.allows(FieldName.SECOND, local.second):
        return False

    return (
        schedule.allows(FieldName.MINUTE, local.minute)
        and schedule.allows(FieldName.HOUR, local.hour)
        and date_matches(schedule, local)
    )
