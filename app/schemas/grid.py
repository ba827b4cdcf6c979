from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class GridSampleIn(BaseModel):
    intensity: Decimal = Field(
        ge=0,
        description="Daily average grid intensity in kg CO2 per kWh.",
        examples=[0.25],
    )


class GridSampleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    intensity: float = Field(description="kg CO2 per kWh.")
