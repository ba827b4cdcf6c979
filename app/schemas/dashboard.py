"""
Dashboard schemas.

GET /dashboard → DashboardResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class DailyPointOut(BaseModel):
    """One day of the 7-day window."""
    model_config = ConfigDict(from_attributes=True)

    date: str
    user_emitted_mass: float = Field(description="kg CO2 logged that day (0 if nothing).")
    grid_intensity: float = Field(description="kg CO2 per kWh (0 if no sample).")


class DashboardResponse(BaseModel):
    selected_date: str = Field(description="Last day (inclusive) of the window.")
    selected_day_total: float = Field(examples=[2.1])
    weekly_mean: float = Field(
        description="Mean over exactly 7 days, days without activity count as 0.",
        examples=[0.3],
    )
    category_breakdown: dict[str, float] = Field(
        description="kg CO2 per category within the window. Absent categories are omitted.",
        examples=[{"driving": 1.8, "electricity": 0.3}],
    )
    days: list[DailyPointOut] = Field(description="Per-day series, oldest first.")
