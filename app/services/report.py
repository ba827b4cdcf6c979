"""
Monthly CSV report.

Layout
------
    Carbon Coach Monthly Report
    User: <display name>
    <blank>
    date,category,amount,emitted_mass,grid_intensity
    2025-05-10,driving,5,0.90,0.25
    ...

Written through the csv module so a display name or category containing
a comma or newline is quoted instead of breaking the columns.
"""
from __future__ import annotations

import csv
import io
from datetime import tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from app.services.joiner import MonthlyReportRow, join_monthly
from app.services.windows import month_range

PRODUCT_SLUG = "carbon-coach"
REPORT_TITLE = "Carbon Coach Monthly Report"
REPORT_COLUMNS = ("date", "category", "amount", "emitted_mass", "grid_intensity")


def _plain(value: Decimal) -> str:
    """Decimal without trailing zeros and without exponent notation."""
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal(1)))
    return format(normalized, "f")


def _mass(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _grid(value: Optional[Decimal]) -> str:
    return "" if value is None else _plain(value)


def render(rows: Iterable[MonthlyReportRow], owner_display_name: str) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)

    writer.writerow([REPORT_TITLE])
    writer.writerow([f"User: {owner_display_name}"])
    writer.writerow([])
    writer.writerow(REPORT_COLUMNS)
    for row in rows:
        writer.writerow([
            row.date.isoformat(),
            row.category,
            _plain(row.amount),
            _mass(row.emitted_mass),
            _grid(row.grid_intensity),
        ])
    return buffer.getvalue()


def build_monthly_report(
    activities: Iterable,
    grid_samples: Iterable,
    year: int,
    month: int,
    owner_display_name: str,
    tz: Union[str, tzinfo] = "UTC",
) -> str:
    """Resolve (year, month), join both series over it and render. Raises InvalidRangeError."""
    start, end = month_range(year, month)
    rows = join_monthly(activities, grid_samples, start, end, tz)
    return render(rows, owner_display_name)


def report_filename(year: int, month: int) -> str:
    return f"{PRODUCT_SLUG}-{year:04d}-{month:02d}.csv"
