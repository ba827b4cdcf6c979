"""
Activity service: stamp emissions at write time, read owner-scoped logs.

Public API
----------
create_activity(db, owner, category, amount, calculator, recorded_at)  -> Activity
list_activities(db, owner, start, end, tz)                              -> list[Activity]
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from app.models.activity import Activity, ActivityCategory
from app.services.emissions import EmissionCalculator, to_decimal
from app.services.joiner import resolve_zone


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _day_start_utc(day: date, tz) -> datetime:
    """Start of `day` in tz as a UTC instant, clamped to the datetime range."""
    try:
        return datetime.combine(day, time.min, tzinfo=resolve_zone(tz)).astimezone(timezone.utc)
    except OverflowError:
        edge = datetime.min if day.year == date.min.year else datetime.max
        return edge.replace(tzinfo=timezone.utc)


def create_activity(
    db: Session,
    owner: str,
    category: str,
    amount,
    calculator: EmissionCalculator,
    recorded_at: Optional[datetime] = None,
) -> Activity:
    """
    Validate, compute emitted_mass once and persist.
    Nothing is written when the calculator rejects the input.
    """
    emitted_mass = calculator.compute(category, amount)

    if recorded_at is None:
        recorded_at = _utc_now()
    elif recorded_at.tzinfo is None:
        recorded_at = recorded_at.replace(tzinfo=timezone.utc)
    else:
        recorded_at = recorded_at.astimezone(timezone.utc)

    activity = Activity(
        owner=owner,
        category=ActivityCategory(category),
        amount=to_decimal(amount, "amount"),
        emitted_mass=emitted_mass,
        recorded_at=recorded_at,
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    logger.info(
        f"Activity {activity.id} logged for owner={owner}: "
        f"{category} amount={activity.amount} -> {emitted_mass} kg CO2"
    )
    return activity


def list_activities(
    db: Session,
    owner: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tz="UTC",
    newest_first: bool = True,
) -> list[Activity]:
    """Owner's activities whose calendar day (in tz) lies in [start, end]."""
    query = db.query(Activity).filter(Activity.owner == owner)
    if start is not None:
        query = query.filter(Activity.recorded_at >= _day_start_utc(start, tz))
    # date.max has no following day; the range is open above.
    if end is not None and end < date.max:
        query = query.filter(Activity.recorded_at < _day_start_utc(end + timedelta(days=1), tz))
    order = Activity.recorded_at.desc() if newest_first else Activity.recorded_at.asc()
    return query.order_by(order, Activity.id.asc()).all()
