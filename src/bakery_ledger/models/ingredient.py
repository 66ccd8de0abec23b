"""
Ingredient model for raw materials held in stock.

Stock and the reorder threshold are stored in the family base unit
(g, ml, u). Cost is quoted per one *display* unit: an ingredient shown in
kilograms at 1.50 costs 1.50 per kg, not per gram.

Example: "Flour" with current_stock=50000 (g), unit=kg, cost_per_unit=1.50
         holds 50 kg worth 75.00.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from .enums import UnitType
from .quantity import BaseQuantity


@dataclass
class Ingredient:
    """
    Ingredient record.

    Attributes:
        id: Stable caller-supplied identifier
        name: Display name (e.g., "Flour 0000")
        current_stock: Amount on hand in base units, never negative
        unit: Preferred display unit; informational, storage is normalized
        cost_per_unit: Money per one display unit
        min_stock: Reorder threshold in base units
    """

    id: str
    name: str
    current_stock: Decimal = Decimal("0")
    unit: UnitType = UnitType.GRAMS
    cost_per_unit: Decimal = Decimal("0")
    min_stock: Decimal = Decimal("0")

    @property
    def stock(self) -> BaseQuantity:
        """Current stock as a base-unit quantity."""
        return BaseQuantity(self.current_stock, self.unit.base_unit)

    @property
    def base_unit(self) -> UnitType:
        return self.unit.base_unit

    @property
    def is_low_stock(self) -> bool:
        """True when stock has fallen to or below the reorder threshold."""
        return self.current_stock <= self.min_stock

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert ingredient to a JSON-compatible dictionary.

        Decimals are written as strings so a load/save round trip is exact.
        """
        return {
            "id": self.id,
            "name": self.name,
            "current_stock": str(self.current_stock),
            "unit": self.unit.value,
            "cost_per_unit": str(self.cost_per_unit),
            "min_stock": str(self.min_stock),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ingredient":
        """Build an ingredient from a dictionary produced by to_dict()."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            current_stock=Decimal(str(data.get("current_stock", "0"))),
            unit=UnitType(data.get("unit", UnitType.GRAMS.value)),
            cost_per_unit=Decimal(str(data.get("cost_per_unit", "0"))),
            min_stock=Decimal(str(data.get("min_stock", "0"))),
        )

    def __repr__(self) -> str:
        return (
            f"Ingredient(id='{self.id}', name='{self.name}', "
            f"current_stock={self.current_stock}, unit='{self.unit.value}')"
        )
