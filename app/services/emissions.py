"""
Emission factor table and calculator.

Public API
----------
EmissionFactorTable(factors)               immutable category -> kg CO2 per unit
EmissionFactorTable.from_settings(settings)
EmissionCalculator(table).compute(category, amount) -> Decimal

The calculator is pure. Persisting its result is the caller's job and
happens exactly once, when the activity row is created.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from types import MappingProxyType
from typing import Any, Mapping

from app.core.config import settings
from app.core.errors import InvalidInputError
from app.models.activity import ActivityCategory, category_value

EMISSION_QUANTUM = Decimal("0.001")
# Scale and range of activities.amount (Numeric(18, 4)).
AMOUNT_QUANTUM = Decimal("0.0001")
AMOUNT_LIMIT = Decimal("1E14")


def to_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} must be a number.", field=field_name, value=value)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field_name} must be a number.", field=field_name, value=value)
    if not result.is_finite():
        raise InvalidInputError(f"{field_name} must be finite.", field=field_name, value=value)
    return result


# ---------------------------------------------------------------------------
# Factor table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmissionFactorTable:
    factors: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        known = {c.value for c in ActivityCategory}
        frozen: dict[str, Decimal] = {}
        for category, factor in self.factors.items():
            key = category_value(category)
            if key not in known:
                raise InvalidInputError(
                    f"Unknown activity category '{key}' in factor table.",
                    field="category", value=key,
                )
            frozen[key] = to_decimal(factor, "factor")
        object.__setattr__(self, "factors", MappingProxyType(frozen))

    @classmethod
    def from_settings(cls, settings) -> "EmissionFactorTable":
        return cls({
            ActivityCategory.driving: settings.DRIVING_FACTOR_KG_PER_KM,
            ActivityCategory.electricity: settings.ELECTRICITY_FACTOR_KG_PER_KWH,
        })

    def factor(self, category) -> Decimal:
        key = category_value(category)
        try:
            return self.factors[key]
        except KeyError:
            raise InvalidInputError(
                f"Unknown activity category '{key}'. "
                f"Expected one of: {', '.join(sorted(self.factors))}.",
                field="category", value=key,
            )


DEFAULT_FACTORS = EmissionFactorTable({
    ActivityCategory.driving: Decimal("0.180"),       # kg / km
    ActivityCategory.electricity: Decimal("0.300"),   # kg / kWh
})


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

class EmissionCalculator:
    def __init__(self, table: EmissionFactorTable = DEFAULT_FACTORS):
        self.table = table

    def compute(self, category, amount) -> Decimal:
        """amount * factor(category), rounded half away from zero to 3 dp."""
        value = to_decimal(amount, "amount")
        if value <= 0:
            raise InvalidInputError("amount must be greater than zero.", field="amount", value=amount)
        if value >= AMOUNT_LIMIT:
            raise InvalidInputError("amount is too large.", field="amount", value=amount)
        if value != value.quantize(AMOUNT_QUANTUM):
            raise InvalidInputError(
                "amount must have at most 4 decimal places.", field="amount", value=amount
            )
        factor = self.table.factor(category)
        return (value * factor).quantize(EMISSION_QUANTUM, rounding=ROUND_HALF_UP)


def get_calculator() -> EmissionCalculator:
    """FastAPI dependency: calculator built from the configured factors."""
    return EmissionCalculator(EmissionFactorTable.from_settings(settings))
