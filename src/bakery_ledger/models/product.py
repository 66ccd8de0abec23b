"""
Product and RecipeLine models.

A Product is a sellable item with a bill of materials. Each RecipeLine
states how much of one ingredient goes into a single unit of the product,
in any unit of that ingredient's family (a cake may list flour in grams
even though flour is stocked and priced in kilograms).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .enums import UnitType


@dataclass
class RecipeLine:
    """
    One ingredient requirement per unit of product.

    Attributes:
        ingredient_id: Referenced ingredient
        quantity: Amount needed for exactly one unit of product
        unit: Unit the quantity is expressed in
    """

    ingredient_id: str
    quantity: Decimal
    unit: UnitType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ingredient_id": self.ingredient_id,
            "quantity": str(self.quantity),
            "unit": self.unit.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecipeLine":
        return cls(
            ingredient_id=str(data["ingredient_id"]),
            quantity=Decimal(str(data["quantity"])),
            unit=UnitType(data["unit"]),
        )


@dataclass
class Product:
    """
    Product definition.

    Attributes:
        id: Stable identifier
        name: Product name (e.g., "Chocolate Cake")
        price: Sale price per unit
        recipe: Recipe lines; order is for display only
        description: Optional description
    """

    id: str
    name: str
    price: Decimal
    recipe: List[RecipeLine] = field(default_factory=list)
    description: Optional[str] = None

    @property
    def ingredient_ids(self) -> List[str]:
        """Distinct ingredient ids referenced by the recipe, in recipe order."""
        seen = []
        for line in self.recipe:
            if line.ingredient_id not in seen:
                seen.append(line.ingredient_id)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "description": self.description,
            "recipe": [line.to_dict() for line in self.recipe],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            recipe=[RecipeLine.from_dict(line) for line in data.get("recipe", [])],
            description=data.get("description"),
        )
