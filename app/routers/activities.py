"""
Activities router.

POST /activities    — log one activity (emissions computed here, once)
GET  /activities    — owner's activities, newest first
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.owner import current_owner
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.models.activity import Activity, category_value
from app.schemas.activity import ActivityCreate, ActivityOut
from app.services.activities import create_activity, list_activities
from app.services.emissions import EmissionCalculator, get_calculator
from app.services.joiner import as_utc

router = APIRouter(prefix="/activities", tags=["activities"])


def _activity_to_response(a: Activity) -> ActivityOut:
    return ActivityOut(
        id=a.id,
        category=category_value(a.category),
        amount=float(a.amount),
        emitted_mass=float(a.emitted_mass),
        recorded_at=as_utc(a.recorded_at).isoformat(),
    )


@router.post(
    "",
    response_model=ActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log an activity",
    responses={
        404: {"model": ErrorResponse, "description": "No owner context."},
        422: {"model": ErrorResponse, "description": "Unknown category or non-positive amount (INVALID_INPUT)."},
    },
)
def post_activity(
    payload: ActivityCreate,
    owner: str = Depends(current_owner),
    calculator: EmissionCalculator = Depends(get_calculator),
    db: Session = Depends(get_db),
):
    """
    Convert the activity to kg CO2 with the configured factor table and
    store it. The stored `emitted_mass` is never recomputed.
    """
    activity = create_activity(
        db=db,
        owner=owner,
        category=payload.category,
        amount=payload.amount,
        calculator=calculator,
        recorded_at=payload.recorded_at,
    )
    return _activity_to_response(activity)


@router.get(
    "",
    response_model=list[ActivityOut],
    summary="List the owner's activities",
)
def get_activities(
    start: Optional[date] = Query(default=None, description="First day (inclusive)."),
    end: Optional[date] = Query(default=None, description="Last day (inclusive)."),
    owner: str = Depends(current_owner),
    db: Session = Depends(get_db),
):
    rows = list_activities(db, owner, start, end, tz=settings.REPORT_TIMEZONE)
    return [_activity_to_response(a) for a in rows]
