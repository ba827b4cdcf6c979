"""
GridIntensity — one averaged grid carbon-intensity value per calendar day.

Written by the daily ingestion job. The unique constraint on `date`
backs the merge policy: a second write for the same day overwrites the
first (last-write-wins), nothing is merged or kept as history.
"""
import datetime
from decimal import Decimal
from sqlalchemy import Integer, Numeric, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class GridIntensity(Base):
    __tablename__ = "grid_intensity"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, unique=True, index=True)
    intensity: Mapped[Decimal] = mapped_column(
        Numeric(10, 4), nullable=False,
        comment="kg CO2 per kWh, daily average",
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
