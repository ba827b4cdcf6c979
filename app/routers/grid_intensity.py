"""
Grid intensity router.

GET /grid-intensity          — samples for the `range` days ending at `end`
PUT /grid-intensity/{day}    — upsert one day (last write wins)
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.grid_intensity import GridIntensity
from app.schemas.grid import GridSampleIn, GridSampleOut
from app.services.dashboard import local_today
from app.services.grid import list_grid_samples, upsert_grid_sample

router = APIRouter(prefix="/grid-intensity", tags=["grid-intensity"])


def _sample_to_response(s: GridIntensity) -> GridSampleOut:
    return GridSampleOut(date=str(s.date), intensity=float(s.intensity))


@router.get(
    "",
    response_model=list[GridSampleOut],
    summary="Daily grid intensity over a trailing range",
)
def get_grid_intensity(
    range_days: int = Query(
        default=7, ge=1, le=366, alias="range",
        description="Number of days, ending at `end` inclusive.",
    ),
    end: Optional[date] = Query(
        default=None,
        description="Last day of the range. Defaults to today.",
        examples=["2025-05-23"],
    ),
    db: Session = Depends(get_db),
):
    """Days without a sample are simply absent; nothing is interpolated."""
    last = end or local_today()
    try:
        first = last - timedelta(days=range_days - 1)
    except OverflowError:
        first = date.min
    return [_sample_to_response(s) for s in list_grid_samples(db, first, last)]


@router.put(
    "/{day}",
    response_model=GridSampleOut,
    summary="Store the daily intensity for one day",
)
def put_grid_intensity(day: date, payload: GridSampleIn, db: Session = Depends(get_db)):
    """Overwrites any existing value for `day`."""
    return _sample_to_response(upsert_grid_sample(db, day, payload.intensity))
