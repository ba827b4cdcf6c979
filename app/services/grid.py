"""
Grid intensity storage.

Merge policy: one row per day, last write wins. A second upsert for a
day replaces the stored value; nothing is averaged or kept as history.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.grid_intensity import GridIntensity


def upsert_grid_sample(db: Session, day: date, intensity: Decimal) -> GridIntensity:
    """Insert or overwrite the sample for `day`."""
    existing = db.query(GridIntensity).filter(GridIntensity.date == day).first()
    if existing is not None:
        existing.intensity = intensity
        db.commit()
        db.refresh(existing)
        logger.info(f"Grid intensity for {day} overwritten: {intensity} kg/kWh")
        return existing

    sample = GridIntensity(date=day, intensity=intensity)
    db.add(sample)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent run inserted the same day first; overwrite it.
        db.rollback()
        sample = db.query(GridIntensity).filter(GridIntensity.date == day).one()
        sample.intensity = intensity
        db.commit()
    db.refresh(sample)
    logger.info(f"Grid intensity for {day} stored: {intensity} kg/kWh")
    return sample


def list_grid_samples(db: Session, start: date, end: date) -> list[GridIntensity]:
    return (
        db.query(GridIntensity)
        .filter(GridIntensity.date >= start, GridIntensity.date <= end)
        .order_by(GridIntensity.date.asc())
        .all()
    )
