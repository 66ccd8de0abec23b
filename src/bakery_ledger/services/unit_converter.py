"""
Unit conversion system for Bakery Ledger.

This module provides:
- Unit parsing and family detection (mass, volume, count)
- Conversion to and from the family base unit
- Same-family conversion between any two units
- Money rounding and stock display helpers

Conversion Strategy:
- Mass units convert through grams (base unit)
- Volume units convert through milliliters (base unit)
- Count units convert through unit-items (base unit)
- Scale factors are integers and arithmetic is Decimal, so
  kg -> g -> kg never drifts
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

from bakery_ledger.models.enums import UnitFamily, UnitType
from bakery_ledger.models.quantity import BaseQuantity, DisplayQuantity
from bakery_ledger.utils.constants import CURRENCY_SYMBOL, MONEY_QUANTUM
from bakery_ledger.utils.validators import to_decimal

from .exceptions import IncompatibleUnitFamily, InvalidQuantity, UnknownUnit

UnitLike = Union[UnitType, str]
Number = Union[Decimal, int, float, str]


# ============================================================================
# Unit Detection
# ============================================================================


def parse_unit(unit: Any) -> UnitType:
    """
    Resolve a unit value into a UnitType.

    Accepts a UnitType or its string value. Matching is case-insensitive so
    "l" and "L" both resolve to liters.

    Args:
        unit: UnitType or unit string

    Returns:
        UnitType

    Raises:
        UnknownUnit: If the unit is not recognized
    """
    if isinstance(unit, UnitType):
        return unit
    if isinstance(unit, str):
        wanted = unit.strip().lower()
        for candidate in UnitType:
            if candidate.value.lower() == wanted:
                return candidate
    raise UnknownUnit(unit)


def get_unit_family(unit: UnitLike) -> UnitFamily:
    """Return the measurement family of a unit."""
    return parse_unit(unit).family


def get_base_unit(unit: UnitLike) -> UnitType:
    """Return the base unit of a unit's family (g, ml or u)."""
    return parse_unit(unit).base_unit


def units_compatible(unit1: UnitLike, unit2: UnitLike) -> bool:
    """
    Check if two units belong to the same family.

    Unknown units are never compatible.
    """
    try:
        return parse_unit(unit1).family == parse_unit(unit2).family
    except UnknownUnit:
        return False


def _quantity(value: Number, field: str = "quantity") -> Decimal:
    amount = to_decimal(value)
    if amount is None:
        raise InvalidQuantity(field, value, "not a finite number")
    return amount


# ============================================================================
# Conversions
# ============================================================================


def to_base(quantity: Number, unit: UnitLike) -> BaseQuantity:
    """
    Convert a quantity into its family base unit.

    Args:
        quantity: Amount in `unit`
        unit: Source unit

    Returns:
        BaseQuantity in g, ml or u

    Raises:
        UnknownUnit: If unit is not recognized
        InvalidQuantity: If quantity is not a finite number

    Example:
        >>> to_base(Decimal("1.5"), "kg").amount
        Decimal('1500.0')
    """
    unit_type = parse_unit(unit)
    amount = _quantity(quantity)
    return BaseQuantity(amount * unit_type.scale, unit_type.base_unit)


def from_base(quantity_in_base: Union[BaseQuantity, Number], unit: UnitLike) -> DisplayQuantity:
    """
    Convert a base-unit amount into `unit`.

    Args:
        quantity_in_base: BaseQuantity, or a plain amount already in the
            base unit of `unit`'s family
        unit: Target unit

    Returns:
        DisplayQuantity in `unit`

    Raises:
        UnknownUnit: If unit is not recognized
        IncompatibleUnitFamily: If a BaseQuantity of another family is given
    """
    unit_type = parse_unit(unit)
    if isinstance(quantity_in_base, BaseQuantity):
        if quantity_in_base.unit.family != unit_type.family:
            raise IncompatibleUnitFamily(quantity_in_base.unit, unit_type)
        amount = quantity_in_base.amount
    else:
        amount = _quantity(quantity_in_base)
    return DisplayQuantity(amount / unit_type.scale, unit_type)


def convert(quantity: Number, from_unit: UnitLike, to_unit: UnitLike) -> Decimal:
    """
    Convert between two units of the same family.

    Args:
        quantity: Amount in from_unit
        from_unit: Source unit
        to_unit: Target unit

    Returns:
        Decimal amount in to_unit

    Raises:
        UnknownUnit: If either unit is not recognized
        IncompatibleUnitFamily: If the units belong to different families

    Example:
        >>> convert(500, "g", "kg")
        Decimal('0.5')
    """
    source = parse_unit(from_unit)
    target = parse_unit(to_unit)
    if source.family != target.family:
        raise IncompatibleUnitFamily(source, target)
    return from_base(to_base(quantity, source), target).amount


# ============================================================================
# Money and Display Helpers
# ============================================================================


def round_money(amount: Decimal) -> Decimal:
    """Round a monetary amount to cents, half up."""
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def format_cost(amount: Number, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Format a cost value for display.

    Returns:
        Formatted currency string (e.g., "$12.50")
    """
    return f"{currency_symbol}{round_money(_quantity(amount, 'amount')):,.2f}"


def format_stock(base_amount: Number, unit: UnitLike) -> str:
    """
    Format a base-unit stock amount in its display unit.

    Args:
        base_amount: Amount in the base unit of unit's family
        unit: Display unit

    Returns:
        String such as "12.5 kg" or "150 u"
    """
    display = from_base(base_amount, unit)
    amount = display.amount.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP).normalize()
    if amount == amount.to_integral_value():
        amount = amount.quantize(Decimal("1"))
    return f"{amount:f} {display.unit.value}"
