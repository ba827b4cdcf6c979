"""
Daily grid intensity ingestion.

Fetches one day of sub-daily CO2 intensity readings (g/kWh) from the
grid operator's chart feed, averages them, converts to kg/kWh and
upserts a single row for that day.

Public API
----------
fetch_daily_intensity(day)   -> Decimal      (network only, no writes)
ingest_day(db, day)          -> GridIntensity
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import requests
from loguru import logger
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import GridFeedError
from app.models.grid_intensity import GridIntensity
from app.services.grid import upsert_grid_sample

INTENSITY_QUANTUM = Decimal("0.0001")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _yesterday() -> date:
    return datetime.now(tz=timezone.utc).date() - timedelta(days=1)


def feed_date(day: date) -> str:
    """Feed date format: 23-May-2025."""
    return f"{day.day:02d}-{_MONTHS[day.month - 1]}-{day.year:04d}"


def _feed_params(day: date) -> dict:
    formatted = feed_date(day)
    return {
        "region": settings.GRID_REGION,
        "chartType": "co2",
        "dateRange": "day",
        "dateFrom": formatted,
        "dateTo": formatted,
        "areas": "co2intensity,co2intensityforecast",
    }


def average_intensity(payload: dict) -> Decimal:
    """Mean of Rows[].Value in g/kWh, returned in kg/kWh."""
    rows = payload.get("Rows") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise GridFeedError("Unexpected feed response: no Rows array.")
    values = [
        Decimal(str(r["Value"])) for r in rows
        if isinstance(r, dict) and isinstance(r.get("Value"), (int, float))
        and not isinstance(r.get("Value"), bool)
    ]
    if not values:
        raise GridFeedError("Feed response contained no intensity readings.")
    grams = sum(values) / len(values)
    return (grams / 1000).quantize(INTENSITY_QUANTUM, rounding=ROUND_HALF_UP)


def fetch_daily_intensity(day: date) -> Decimal:
    logger.info(f"Fetching grid intensity for {day} from {settings.GRID_FEED_URL}")
    try:
        response = requests.get(
            settings.GRID_FEED_URL,
            params=_feed_params(day),
            timeout=settings.GRID_FEED_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error(f"Grid feed request for {day} failed: {exc}")
        raise GridFeedError(
            message=f"Grid feed request for {day} failed.",
            details={"day": str(day), "error": str(exc)},
        ) from exc

    intensity = average_intensity(payload)
    logger.info(f"Grid intensity for {day}: {len(payload['Rows'])} rows, avg {intensity} kg/kWh")
    return intensity


def ingest_day(db: Session, day: Optional[date] = None) -> GridIntensity:
    """Fetch and store one day (default: yesterday UTC)."""
    target = day or _yesterday()
    intensity = fetch_daily_intensity(target)
    return upsert_grid_sample(db, target, intensity)
