"""
Enumerations for the bakery domain.

This module contains enums used across the domain models:
- UnitFamily: Measurement family a unit belongs to
- UnitType: Closed set of measurement units
- OrderStatus: Lifecycle status of a customer order
"""

from enum import Enum

from bakery_ledger.utils.constants import COUNT_TO_ITEMS, MASS_TO_GRAMS, VOLUME_TO_ML


class UnitFamily(str, Enum):
    """
    Measurement family.

    Conversion is only defined between units of the same family.

    Values:
        MASS: grams and kilograms (base: g)
        VOLUME: milliliters and liters (base: ml)
        COUNT: unit-items (base: u)
    """

    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"


class UnitType(str, Enum):
    """
    Measurement unit.

    Values match the strings stored in snapshots ("g", "kg", "ml", "L", "u").
    """

    GRAMS = "g"
    KILOGRAMS = "kg"
    MILLILITERS = "ml"
    LITERS = "L"
    UNITS = "u"

    @property
    def family(self) -> UnitFamily:
        if self.value in MASS_TO_GRAMS:
            return UnitFamily.MASS
        if self.value in VOLUME_TO_ML:
            return UnitFamily.VOLUME
        return UnitFamily.COUNT

    @property
    def scale(self) -> int:
        """Integer factor from this unit to its family base unit."""
        for table in (MASS_TO_GRAMS, VOLUME_TO_ML, COUNT_TO_ITEMS):
            if self.value in table:
                return table[self.value]
        raise KeyError(self.value)

    @property
    def base_unit(self) -> "UnitType":
        return _BASE_UNITS[self.family]

    @property
    def is_base(self) -> bool:
        return self.scale == 1


_BASE_UNITS = {
    UnitFamily.MASS: UnitType.GRAMS,
    UnitFamily.VOLUME: UnitType.MILLILITERS,
    UnitFamily.COUNT: UnitType.UNITS,
}


class OrderStatus(str, Enum):
    """
    Order lifecycle status.

    Statuses are a flat set: any status may move to any other. Only entering
    COMPLETED from another status has an inventory effect.

    Values:
        PENDING: Received, not started
        IN_PROGRESS: Being produced
        COMPLETED: Produced; recipe ingredients are consumed from stock
        DELIVERED: Handed to the customer; counts as revenue
        CANCELLED: Will not be delivered; counts as lost revenue
    """

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @property
    def is_fulfilled(self) -> bool:
        """Goods have been produced (Completed or Delivered)."""
        return self in (OrderStatus.COMPLETED, OrderStatus.DELIVERED)
