"""
Models package.

Domain records (dataclasses) and the SQLAlchemy model used by the state store.
"""

from .base import Base, BaseModel
from .enums import OrderStatus, UnitFamily, UnitType
from .quantity import BaseQuantity, DisplayQuantity
from .ingredient import Ingredient
from .product import Product, RecipeLine
from .order import Order, OrderLine
from .customer import Customer
from .state import BakeryState
from .state_record import StateRecord

__all__ = [
    "Base",
    "BaseModel",
    # Enums
    "OrderStatus",
    "UnitFamily",
    "UnitType",
    # Quantities
    "BaseQuantity",
    "DisplayQuantity",
    # Domain records
    "Ingredient",
    "Product",
    "RecipeLine",
    "Order",
    "OrderLine",
    "Customer",
    "BakeryState",
    # Persistence
    "StateRecord",
]
