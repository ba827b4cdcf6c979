"""
Dashboard aggregates derived from a joined 7-day window.

Sums run at full Decimal precision; rounding to 2 dp happens once, on
the way out.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

from app.models.activity import category_value
from app.services.joiner import DailyAggregate, activity_day
from app.services.windows import WINDOW_DAYS

DISPLAY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


@dataclass
class DashboardSummary:
    selected_date: date
    selected_day_total: Decimal
    weekly_mean: Decimal
    category_breakdown: dict[str, Decimal] = field(default_factory=dict)


def _display(value: Decimal) -> Decimal:
    return value.quantize(DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)


def aggregate(
    daily: list[DailyAggregate],
    selected_date: date,
    activities_in_window: Iterable,
    tz: Union[str, tzinfo] = "UTC",
) -> DashboardSummary:
    """
    selected_day_total : mass on selected_date (0 if it is not in the window)
    weekly_mean        : sum of all window days / 7, empty days included
    category_breakdown : mass per category for activities inside the window;
                         categories without activity are left out
    """
    selected = ZERO
    week_total = ZERO
    window_days = set()
    for d in daily:
        window_days.add(d.date)
        week_total += d.user_emitted_mass
        if d.date == selected_date:
            selected = d.user_emitted_mass

    by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for a in activities_in_window:
        if activity_day(a.recorded_at, tz) in window_days:
            by_category[category_value(a.category)] += Decimal(str(a.emitted_mass))

    return DashboardSummary(
        selected_date=selected_date,
        selected_day_total=_display(selected),
        weekly_mean=_display(week_total / WINDOW_DAYS),
        category_breakdown={k: _display(by_category[k]) for k in sorted(by_category)},
    )
