"""
Series joiner: aligns the personal activity log and the daily grid
intensity log on a date axis.

Public API
----------
as_utc(ts)                                                 -> datetime
activity_day(recorded_at, tz)                              -> date
join_daily(activities, grid_samples, axis, tz)             -> list[DailyAggregate]
join_monthly(activities, grid_samples, start, end, tz)     -> list[MonthlyReportRow]

Inputs are duck-typed: activities need `category`, `amount`,
`emitted_mass` and `recorded_at`; grid samples need `date` and
`intensity`. ORM rows work as-is.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo

from app.models.activity import category_value

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class DailyAggregate:
    date: date
    user_emitted_mass: Decimal   # sum over that day, 0 when nothing logged
    grid_intensity: Decimal      # 0 when no sample for that day


@dataclass
class MonthlyReportRow:
    date: date
    category: str
    amount: Decimal
    emitted_mass: Decimal
    grid_intensity: Optional[Decimal]   # None = no sample, distinct from a measured 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _dec(v) -> Decimal:
    return v if isinstance(v, Decimal) else Decimal(str(v))


def resolve_zone(tz: Union[str, tzinfo]) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def as_utc(ts: datetime) -> datetime:
    # Naive timestamps come back from SQLite; storage is UTC.
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def activity_day(recorded_at: datetime, tz: Union[str, tzinfo] = "UTC") -> date:
    """Calendar day of a timestamp in the reference time zone."""
    return as_utc(recorded_at).astimezone(resolve_zone(tz)).date()


def grid_by_date(grid_samples: Iterable) -> dict[date, Decimal]:
    """Index samples by day. A later sample for the same day replaces an earlier one."""
    return {s.date: _dec(s.intensity) for s in grid_samples}


# ---------------------------------------------------------------------------
# Dashboard mode
# ---------------------------------------------------------------------------

def join_daily(
    activities: Iterable,
    grid_samples: Iterable,
    axis: list[date],
    tz: Union[str, tzinfo] = "UTC",
) -> list[DailyAggregate]:
    """One aggregate per axis date, in axis order, zero-filled."""
    zone = resolve_zone(tz)
    wanted = set(axis)
    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for a in activities:
        day = activity_day(a.recorded_at, zone)
        if day in wanted:
            totals[day] += _dec(a.emitted_mass)

    grid = grid_by_date(grid_samples)
    return [
        DailyAggregate(
            date=day,
            user_emitted_mass=totals.get(day, ZERO),
            grid_intensity=grid.get(day, ZERO),
        )
        for day in axis
    ]


# ---------------------------------------------------------------------------
# Export mode
# ---------------------------------------------------------------------------

def join_monthly(
    activities: Iterable,
    grid_samples: Iterable,
    start: date,
    end: date,
    tz: Union[str, tzinfo] = "UTC",
) -> list[MonthlyReportRow]:
    """
    One row per activity whose day falls in [start, end], oldest first.
    sorted() is stable, so equal timestamps keep their input order.
    """
    zone = resolve_zone(tz)
    grid = grid_by_date(grid_samples)

    in_range = []
    for a in activities:
        day = activity_day(a.recorded_at, zone)
        if start <= day <= end:
            in_range.append((day, a))
    in_range.sort(key=lambda pair: as_utc(pair[1].recorded_at))

    return [
        MonthlyReportRow(
            date=day,
            category=category_value(a.category),
            amount=_dec(a.amount),
            emitted_mass=_dec(a.emitted_mass),
            grid_intensity=grid.get(day),
        )
        for day, a in in_range
    ]
