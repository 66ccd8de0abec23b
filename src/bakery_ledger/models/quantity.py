"""
Quantity value types.

Stock is stored in base units while costs are quoted per display unit.
Arithmetic only combines quantities of the same type and unit; the
functions in services.unit_converter convert between the two.
"""

from dataclasses import dataclass
from decimal import Decimal

from .enums import UnitType


@dataclass(frozen=True)
class BaseQuantity:
    """
    An amount expressed in a family base unit (g, ml or u).

    Attributes:
        amount: Decimal amount
        unit: Base unit of the family

    Raises:
        ValueError: If unit is not a base unit
    """

    amount: Decimal
    unit: UnitType

    def __post_init__(self) -> None:
        if not self.unit.is_base:
            raise ValueError(f"{self.unit.value} is not a base unit")

    def _check(self, other: object) -> "BaseQuantity":
        if not isinstance(other, BaseQuantity):
            raise TypeError(f"Cannot combine BaseQuantity with {type(other).__name__}")
        if other.unit != self.unit:
            raise ValueError(f"Cannot combine {self.unit.value} with {other.unit.value}")
        return other

    def __add__(self, other: "BaseQuantity") -> "BaseQuantity":
        other = self._check(other)
        return BaseQuantity(self.amount + other.amount, self.unit)

    def __sub__(self, other: "BaseQuantity") -> "BaseQuantity":
        other = self._check(other)
        return BaseQuantity(self.amount - other.amount, self.unit)

    def __mul__(self, factor) -> "BaseQuantity":
        if isinstance(factor, (BaseQuantity, DisplayQuantity)):
            raise TypeError("Quantities can only be scaled by plain numbers")
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        return BaseQuantity(self.amount * factor, self.unit)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"{self.amount:f} {self.unit.value}"


@dataclass(frozen=True)
class DisplayQuantity:
    """
    An amount expressed in an ingredient's display unit.

    Attributes:
        amount: Decimal amount
        unit: Any unit
    """

    amount: Decimal
    unit: UnitType

    def __add__(self, other: "DisplayQuantity") -> "DisplayQuantity":
        if not isinstance(other, DisplayQuantity):
            raise TypeError(f"Cannot combine DisplayQuantity with {type(other).__name__}")
        if other.unit != self.unit:
            raise ValueError(f"Cannot combine {self.unit.value} with {other.unit.value}")
        return DisplayQuantity(self.amount + other.amount, self.unit)

    def __str__(self) -> str:
        return f"{self.amount:f} {self.unit.value}"
