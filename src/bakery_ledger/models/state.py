"""
BakeryState: the in-memory domain state owned by the core.

Collections are dictionaries keyed by id. Dictionary insertion order is
creation order; order queries present the newest order first.
"""

from dataclasses import dataclass, field
from typing import Dict

from .customer import Customer
from .ingredient import Ingredient
from .order import Order
from .product import Product


@dataclass
class BakeryState:
    """
    Container for every domain collection.

    Attributes:
        ingredients: Ingredient records by id
        products: Product records by id
        orders: Order records by id, in creation order
        customers: Customer directory by id
    """

    ingredients: Dict[str, Ingredient] = field(default_factory=dict)
    products: Dict[str, Product] = field(default_factory=dict)
    orders: Dict[str, Order] = field(default_factory=dict)
    customers: Dict[str, Customer] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"BakeryState(ingredients={len(self.ingredients)}, "
            f"products={len(self.products)}, orders={len(self.orders)}, "
            f"customers={len(self.customers)})"
        )
