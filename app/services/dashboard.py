"""
Dashboard service: fetch -> window -> join -> aggregate.

Everything after the two reads is pure; repeated calls on unchanged data
return identical results.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import FutureDateError
from app.services.activities import list_activities
from app.services.aggregator import DashboardSummary, aggregate
from app.services.grid import list_grid_samples
from app.services.joiner import DailyAggregate, join_daily
from app.services.windows import build_window


@dataclass
class Dashboard:
    window: list[date]
    days: list[DailyAggregate]
    summary: DashboardSummary


def local_today(tz: Optional[str] = None) -> date:
    return datetime.now(tz=ZoneInfo(tz or settings.REPORT_TIMEZONE)).date()


def get_dashboard(
    db: Session,
    owner: str,
    selected_date: Optional[date] = None,
    tz: Optional[str] = None,
) -> Dashboard:
    """Raises FutureDateError when selected_date is after today."""
    zone = tz or settings.REPORT_TIMEZONE
    today = local_today(zone)
    target = selected_date or today
    if target > today:
        raise FutureDateError(day=target, today=today)

    window = build_window(target)
    activities = list_activities(db, owner, window[0], window[-1], tz=zone, newest_first=False)
    grid = list_grid_samples(db, window[0], window[-1])

    days = join_daily(activities, grid, window, zone)
    summary = aggregate(days, target, activities, zone)
    return Dashboard(window=window, days=days, summary=summary)
