"""Tests for input validators."""

from decimal import Decimal

import pytest

from bakery_ledger.utils.validators import (
    to_decimal,
    validate_non_negative_number,
    validate_positive_integer,
    validate_positive_number,
    validate_required_string,
    validate_string_length,
    validate_unit,
)


class TestToDecimal:
    """Tests for to_decimal()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(1.5, Decimal("1.5")), ("2.40", Decimal("2.40")), (3, Decimal("3")), (Decimal("7"), Decimal("7"))],
    )
    def test_numbers(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", "NaN", float("inf"), "-Infinity", [1]])
    def test_rejected(self, value):
        assert to_decimal(value) is None


class TestValidators:
    """Tests for (is_valid, message) validators."""

    def test_required_string(self):
        assert validate_required_string("Flour") == (True, "")
        is_valid, error = validate_required_string("   ", "Name")
        assert not is_valid
        assert error.startswith("Name:")

    def test_string_length(self):
        assert validate_string_length("abc", 3)[0]
        assert not validate_string_length("abcd", 3)[0]

    def test_positive_number(self):
        assert validate_positive_number("0.1")[0]
        assert not validate_positive_number(0)[0]
        assert not validate_positive_number("x")[0]

    def test_non_negative_number(self):
        assert validate_non_negative_number(0)[0]
        assert not validate_non_negative_number("-0.01")[0]

    def test_positive_integer(self):
        assert validate_positive_integer(3)[0]
        assert validate_positive_integer("4")[0]
        assert not validate_positive_integer(2.5)[0]
        assert not validate_positive_integer(0)[0]

    def test_unit(self):
        assert validate_unit("kg")[0]
        assert validate_unit("l")[0]
        assert not validate_unit("cup")[0]
        assert not validate_unit("")[0]
