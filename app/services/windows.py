"""
Date axes for the dashboard window and the monthly export.

All arithmetic is on calendar dates, never on instants, so month/year
rollovers and DST shifts cannot move a day in or out of the axis.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from app.core.errors import InvalidRangeError

WINDOW_DAYS = 7


def build_window(anchor: date) -> list[date]:
    """Return [anchor - 6d, ..., anchor], oldest first."""
    if isinstance(anchor, datetime) or not isinstance(anchor, date):
        raise InvalidRangeError(
            message="Window anchor must be a calendar date without a time component.",
            details={"anchor": str(anchor)},
        )
    try:
        return [anchor - timedelta(days=i) for i in range(WINDOW_DAYS - 1, -1, -1)]
    except OverflowError:
        raise InvalidRangeError(
            message=f"Window ending {anchor} starts before the first representable date.",
            details={"anchor": str(anchor)},
        )


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last day of the calendar month."""
    if (
        isinstance(year, bool) or isinstance(month, bool)
        or not isinstance(year, int) or not isinstance(month, int)
        or not (1 <= month <= 12)
        or not (date.min.year <= year <= date.max.year)
    ):
        raise InvalidRangeError(
            message=f"{year}-{month} is not a valid calendar month.",
            details={"year": str(year), "month": str(month)},
        )
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
