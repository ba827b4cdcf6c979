"""
Dashboard router.

GET /dashboard   — 7-day window ending on `date` with the three aggregates
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.owner import current_owner
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.dashboard import DailyPointOut, DashboardResponse
from app.services.dashboard import Dashboard, get_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _dashboard_to_response(d: Dashboard) -> DashboardResponse:
    s = d.summary
    return DashboardResponse(
        selected_date=str(s.selected_date),
        selected_day_total=float(s.selected_day_total),
        weekly_mean=float(s.weekly_mean),
        category_breakdown={k: float(v) for k, v in s.category_breakdown.items()},
        days=[
            DailyPointOut(
                date=str(p.date),
                user_emitted_mass=float(p.user_emitted_mass),
                grid_intensity=float(p.grid_intensity),
            )
            for p in d.days
        ],
    )


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Weekly emissions dashboard",
    responses={
        404: {"model": ErrorResponse, "description": "No owner context."},
        422: {"model": ErrorResponse, "description": "`date` is in the future (INVALID_RANGE)."},
    },
)
def dashboard(
    selected: Optional[date] = Query(
        default=None, alias="date",
        description="Selected day, last of the 7-day window. Defaults to today.",
        examples=["2025-05-23"],
    ),
    owner: str = Depends(current_owner),
    db: Session = Depends(get_db),
):
    """
    - **selected_day_total**: kg CO2 logged on the selected day.
    - **weekly_mean**: total over the window divided by 7.
    - **category_breakdown**: kg CO2 per category inside the window.
    - **days**: per-day user emissions and grid intensity, oldest first.
    """
    return _dashboard_to_response(get_dashboard(db, owner, selected))
