"""
Activity schemas.

POST /activities  → ActivityCreate → ActivityOut
GET  /activities  → list[ActivityOut]
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActivityCreate(BaseModel):
    """
    A new activity. Category and amount are checked by the emission
    calculator, which answers with INVALID_INPUT on bad values.
    """
    category: str = Field(
        description="Activity category: 'driving' (km) or 'electricity' (kWh).",
        examples=["driving"],
    )
    amount: Decimal = Field(
        description="Kilometres driven or kilowatt-hours used. Must be > 0.",
        examples=[12.5],
    )
    recorded_at: Optional[datetime] = Field(
        default=None,
        description="When the activity happened. Defaults to now (UTC).",
        examples=["2025-05-10T08:30:00Z"],
    )

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    amount: float
    emitted_mass: float = Field(description="kg CO2, fixed at creation.")
    recorded_at: str
