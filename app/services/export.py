"""
Monthly export: owner's activities for one calendar month joined with
grid intensity, rendered as CSV text.
"""
from __future__ import annotations

from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from app.core.config import settings
from app.services.activities import list_activities
from app.services.grid import list_grid_samples
from app.services.profile import display_name_for
from app.services.report import build_monthly_report, report_filename
from app.services.windows import month_range


def export_month(
    db: Session,
    owner: str,
    year: int,
    month: int,
    tz: Optional[str] = None,
) -> tuple[str, str]:
    """Return (filename, csv_text). Raises InvalidRangeError before touching the DB."""
    zone = tz or settings.REPORT_TIMEZONE
    start, end = month_range(year, month)

    activities = list_activities(db, owner, start, end, tz=zone, newest_first=False)
    grid = list_grid_samples(db, start, end)
    text = build_monthly_report(
        activities, grid, year, month, display_name_for(db, owner), zone
    )
    logger.info(f"Exported {year}-{month:02d} for owner={owner}: {len(activities)} activities")
    return report_filename(year, month), text
