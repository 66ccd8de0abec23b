"""
Tests for the unit conversion system.

Tests cover:
- Unit parsing and family detection
- to_base / from_base / convert
- Cross-family rejection
- Money rounding and display helpers
"""

from decimal import Decimal

import pytest

from bakery_ledger.models import BaseQuantity, DisplayQuantity, UnitFamily, UnitType
from bakery_ledger.services.exceptions import (
    IncompatibleUnitFamily,
    InvalidQuantity,
    UnknownUnit,
)
from bakery_ledger.services.unit_converter import (
    convert,
    format_cost,
    format_stock,
    from_base,
    get_base_unit,
    get_unit_family,
    parse_unit,
    round_money,
    to_base,
    units_compatible,
)


class TestParseUnit:
    """Tests for unit parsing."""

    def test_parse_unit_accepts_enum(self):
        assert parse_unit(UnitType.KILOGRAMS) is UnitType.KILOGRAMS

    def test_parse_unit_is_case_insensitive(self):
        assert parse_unit("l") is UnitType.LITERS
        assert parse_unit("KG") is UnitType.KILOGRAMS
        assert parse_unit(" ml ") is UnitType.MILLILITERS

    def test_parse_unit_unknown(self):
        with pytest.raises(UnknownUnit) as exc_info:
            parse_unit("cup")
        assert exc_info.value.unit == "cup"

    def test_parse_unit_rejects_non_string(self):
        with pytest.raises(UnknownUnit):
            parse_unit(None)

    def test_families_and_base_units(self):
        assert get_unit_family("kg") == UnitFamily.MASS
        assert get_unit_family("L") == UnitFamily.VOLUME
        assert get_unit_family("u") == UnitFamily.COUNT
        assert get_base_unit("kg") is UnitType.GRAMS
        assert get_base_unit("L") is UnitType.MILLILITERS
        assert get_base_unit("u") is UnitType.UNITS

    def test_units_compatible(self):
        assert units_compatible("g", "kg")
        assert units_compatible("ml", "L")
        assert not units_compatible("g", "ml")
        assert not units_compatible("g", "cup")


class TestConversions:
    """Tests for base-unit conversions."""

    def test_to_base_kilograms(self):
        result = to_base(Decimal("1.5"), "kg")
        assert result == BaseQuantity(Decimal("1500"), UnitType.GRAMS)

    def test_to_base_liters_from_float(self):
        result = to_base(0.25, "L")
        assert result.amount == Decimal("250")
        assert result.unit is UnitType.MILLILITERS

    def test_to_base_base_unit_is_identity(self):
        assert to_base(4, "u").amount == Decimal("4")

    def test_to_base_rejects_non_finite(self):
        with pytest.raises(InvalidQuantity):
            to_base("NaN", "g")
        with pytest.raises(InvalidQuantity):
            to_base(float("inf"), "g")

    def test_from_base_plain_amount(self):
        result = from_base(Decimal("2500"), "kg")
        assert result == DisplayQuantity(Decimal("2.5"), UnitType.KILOGRAMS)

    def test_from_base_quantity(self):
        result = from_base(BaseQuantity(Decimal("750"), UnitType.MILLILITERS), "L")
        assert result.amount == Decimal("0.75")

    def test_from_base_quantity_other_family(self):
        with pytest.raises(IncompatibleUnitFamily):
            from_base(BaseQuantity(Decimal("750"), UnitType.MILLILITERS), "kg")

    @pytest.mark.parametrize(
        "quantity,unit",
        [("1.234", "kg"), ("0.001", "L"), ("12", "u"), ("37.5", "g"), ("3", "ml")],
    )
    def test_round_trip_within_family(self, quantity, unit):
        amount = Decimal(quantity)
        assert from_base(to_base(amount, unit), unit).amount == amount

    def test_convert_same_family(self):
        assert convert(500, "g", "kg") == Decimal("0.5")
        assert convert("0.25", "L", "ml") == Decimal("250")
        assert convert(3, "kg", "kg") == Decimal("3")

    def test_convert_across_families_fails(self):
        with pytest.raises(IncompatibleUnitFamily) as exc_info:
            convert(1, "g", "ml")
        assert exc_info.value.from_unit == "g"
        assert exc_info.value.to_unit == "ml"

    def test_convert_count_to_mass_fails(self):
        with pytest.raises(IncompatibleUnitFamily):
            convert(1, "u", "kg")


class TestDisplayHelpers:
    """Tests for money and stock formatting."""

    def test_round_money_half_up(self):
        assert round_money(Decimal("1.745")) == Decimal("1.75")
        assert round_money(Decimal("1.744")) == Decimal("1.74")

    def test_format_cost(self):
        assert format_cost(Decimal("1234.5")) == "$1,234.50"
        assert format_cost("0.2") == "$0.20"

    def test_format_stock(self):
        assert format_stock(Decimal("12500"), "kg") == "12.5 kg"
        assert format_stock(Decimal("150"), "u") == "150 u"
        assert format_stock(Decimal("12000"), "L") == "12 L"
