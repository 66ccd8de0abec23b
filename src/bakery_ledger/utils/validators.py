"""
Input validation functions for the Bakery Ledger application.

This module provides validation functions for service inputs including:
- Numeric validation (finite, positive, non-negative, whole numbers)
- String validation (required fields, length)
- Unit validation

Each validator returns a tuple of (is_valid, error_message).
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from .constants import (
    ALL_UNITS,
    ERROR_INVALID_INTEGER,
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_INVALID_UNIT,
    ERROR_REQUIRED_FIELD,
)


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert a numeric value to a finite Decimal.

    Floats go through str() so 1.5 becomes Decimal("1.5"), not its binary
    expansion. Booleans are rejected.

    Args:
        value: int, float, str or Decimal

    Returns:
        Decimal, or None if the value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        return None
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not result.is_finite():
        return None
    return result


def validate_required_string(value: Optional[str], field_name: str = "Field") -> Tuple[bool, str]:
    """Validate that a string field is not empty."""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    return True, ""


def validate_string_length(
    value: Optional[str], max_length: int, field_name: str = "Field"
) -> Tuple[bool, str]:
    """Validate that a string doesn't exceed maximum length."""
    if value and len(value) > max_length:
        return False, f"{field_name}: Must be {max_length} characters or less"
    return True, ""


def validate_positive_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a finite positive number (> 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    number = to_decimal(value)
    if number is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if number <= 0:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_non_negative_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a finite non-negative number (>= 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    number = to_decimal(value)
    if number is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if number < 0:
        return False, f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"
    return True, ""


def validate_positive_integer(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """Validate that a value is a whole number greater than zero."""
    number = to_decimal(value)
    if number is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if number != number.to_integral_value():
        return False, f"{field_name}: {ERROR_INVALID_INTEGER}"
    if number <= 0:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_unit(unit: Any, field_name: str = "Unit") -> Tuple[bool, str]:
    """
    Validate that a unit is one of the known units.

    Args:
        unit: Unit string or UnitType
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not unit:
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"

    value = getattr(unit, "value", unit)
    if not isinstance(value, str) or value.lower() not in [u.lower() for u in ALL_UNITS]:
        return False, f"{field_name}: {ERROR_INVALID_UNIT}"

    return True, ""
