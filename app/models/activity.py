from datetime import datetime
from decimal import Decimal
from sqlalchemy import Integer, String, Numeric, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class ActivityCategory(str, enum.Enum):
    driving = "driving"         # amount in km
    electricity = "electricity"  # amount in kWh


def category_value(v) -> str:
    """Plain string for an ActivityCategory member or a raw category string."""
    return v.value if hasattr(v, "value") else str(v)


class Activity(Base):
    """
    One logged activity.

    emitted_mass is stamped once at creation from the emission factor in
    force at that moment. It is never recomputed, so changing a factor
    does not rewrite history.
    """

    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    category: Mapped[str] = mapped_column(
        Enum(ActivityCategory, name="activity_category_enum"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    emitted_mass: Mapped[Decimal] = mapped_column(
        Numeric(18, 3), nullable=False,
        comment="kg CO2, rounded to 3 decimals at creation",
    )
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
