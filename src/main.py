#!/usr/bin/env python3
"""Command line entry point for ChronoCron.

Previews the upcoming run times of a schedule, or runs it as a job that
logs every firing.
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from config import settings
from models import CronError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(settings.log_file) if settings.log_file else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)


def preview(schedule: str, count: int, from_time: datetime = None) -> int:
    """Print the next run times of a schedule."""
    from cron import parse_expression, iter_next_runs

    result = parse_expression(schedule)
    if not result.ok:
        print(f"Invalid schedule '{schedule}': {result.error}", file=sys.stderr)
        return 1

    runs = list(iter_next_runs(result.value, from_time, count))
    if not runs:
        print(f"No run for '{schedule}' within the search horizon")
        return 0

    for run in runs:
        print(run.isoformat())
    return 0


async def run_job(schedule: str):
    """Run a job that logs each firing until cancelled."""
    from scheduler import CronJob, shutdown_default_scheduler

    job = CronJob("cli", schedule, lambda: logger.info(f"Fired '{schedule}'"))
    job.start()
    logger.info(f"Next run at {job.get_next_run()}")

    try:
        await asyncio.Event().wait()
    finally:
        job.stop()
        shutdown_default_scheduler()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="ChronoCron schedule tool")
    parser.add_argument(
        "schedule",
        help="Cron expression (5 or 6 fields) or alias such as @daily"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=5,
        help="Number of upcoming runs to print (default: 5)"
    )
    parser.add_argument(
        "--from",
        dest="from_time",
        type=datetime.fromisoformat,
        default=None,
        help="ISO timestamp to search from (default: now)"
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Run the schedule and log each firing until interrupted"
    )

    args = parser.parse_args()

    try:
        if args.run:
            asyncio.run(run_job(args.schedule))
        else:
            sys.exit(preview(args.schedule, args.count, args.from_time))

    except CronError as e:
        logger.error(f"Invalid schedule: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down ChronoCron...")


if __name__ == "__main__":
    main()
