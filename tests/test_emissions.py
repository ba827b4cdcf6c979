"""
Unit tests for the emission factor table and calculator (no DB, no HTTP).
"""
import pytest
from decimal import Decimal

from app.core.errors import InvalidInputError
from app.models.activity import ActivityCategory
from app.services.emissions import (
    DEFAULT_FACTORS,
    EmissionCalculator,
    EmissionFactorTable,
)


class TestFactorTable:
    def test_default_factors(self):
        assert DEFAULT_FACTORS.factor("driving") == Decimal("0.180")
        assert DEFAULT_FACTORS.factor("electricity") == Decimal("0.300")

    def test_accepts_enum_members(self):
        assert DEFAULT_FACTORS.factor(ActivityCategory.driving) == Decimal("0.180")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_FACTORS.factors["driving"] = Decimal("1")

    def test_unknown_category_in_table_rejected(self):
        with pytest.raises(InvalidInputError):
            EmissionFactorTable({"flying": 0.25})

    def test_from_settings(self):
        class _S:
            DRIVING_FACTOR_KG_PER_KM = 0.2
            ELECTRICITY_FACTOR_KG_PER_KWH = 0.5

        table = EmissionFactorTable.from_settings(_S())
        assert table.factor("driving") == Decimal("0.2")
        assert table.factor("electricity") == Decimal("0.5")


class TestCompute:
    calc = EmissionCalculator()

    def test_driving(self):
        assert self.calc.compute("driving", 5) == Decimal("0.900")

    def test_electricity(self):
        assert self.calc.compute("electricity", 7) == Decimal("2.100")

    def test_result_has_three_decimals(self):
        assert self.calc.compute("driving", 1).as_tuple().exponent == -3

    def test_rounds_half_away_from_zero(self):
        # 0.015 * 0.300 = 0.0045 -> 0.005 (banker's rounding would give 0.004)
        assert self.calc.compute("electricity", "0.015") == Decimal("0.005")
        # 0.025 * 0.180 = 0.0045 -> 0.005
        assert self.calc.compute("driving", "0.025") == Decimal("0.005")

    def test_float_amount_uses_its_decimal_repr(self):
        assert self.calc.compute("driving", 12.5) == Decimal("2.250")

    def test_deterministic(self):
        assert self.calc.compute("driving", 33.3) == self.calc.compute("driving", 33.3)

    def test_custom_table_injected(self):
        calc = EmissionCalculator(EmissionFactorTable({"driving": "0.1", "electricity": "0.2"}))
        assert calc.compute("driving", 10) == Decimal("1.000")
        assert calc.compute("electricity", 10) == Decimal("2.000")

    @pytest.mark.parametrize("amount", [0, -1, "-0.5", Decimal("0")])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            self.calc.compute("driving", amount)
        assert exc_info.value.details["field"] == "amount"

    @pytest.mark.parametrize("amount", ["0.00004", "0.008349", Decimal("1E14")])
    def test_amount_outside_stored_range_rejected(self, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            self.calc.compute("driving", amount)
        assert exc_info.value.details["field"] == "amount"

    def test_four_decimal_amount_accepted(self):
        assert self.calc.compute("electricity", "0.0083") == Decimal("0.002")

    @pytest.mark.parametrize("amount", ["abc", None, True, float("nan"), float("inf")])
    def test_non_numeric_amount_rejected(self, amount):
        with pytest.raises(InvalidInputError):
            self.calc.compute("driving", amount)

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            self.calc.compute("flying", 10)
        assert exc_info.value.details["field"] == "category"

    def test_category_missing_from_table_is_not_defaulted(self):
        calc = EmissionCalculator(EmissionFactorTable({"driving": "0.18"}))
        with pytest.raises(InvalidInputError):
            calc.compute("electricity", 10)
