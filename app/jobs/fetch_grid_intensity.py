"""
Scheduled job: store yesterday's average grid intensity.

Run once a day (cron / platform scheduler):

    carbon-coach-fetch-grid                  # yesterday, UTC
    carbon-coach-fetch-grid --day 2025-05-23

Overlapping runs for the same day are harmless: the later upsert wins.
"""
import argparse
import sys
from datetime import date

from loguru import logger

from app.core.config import settings
from app.core.errors import CarbonCoachException
from app.core.logging import configure_logging
from app.db.base import SessionLocal
from app.services.grid_feed import ingest_day


def create_parser():
    parser = argparse.ArgumentParser(
        prog="carbon-coach-fetch-grid",
        description="Fetch one day of grid CO2 intensity and upsert its daily average.",
    )
    parser.add_argument(
        "--day",
        type=date.fromisoformat,
        default=None,
        help="ISO date to fetch (default: yesterday, UTC)",
    )
    return parser


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        sample = ingest_day(db, args.day)
    except CarbonCoachException as exc:
        logger.error(f"Grid intensity ingestion failed: {exc.message}")
        return 1
    finally:
        db.close()

    logger.info(f"Stored grid intensity for {sample.date}: {sample.intensity} kg/kWh")
    return 0


if __name__ == "__main__":
    sys.exit(main())
