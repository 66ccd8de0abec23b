"""
Sample data for development and demos.

Loads a small starter bakery (five ingredients, two products and one
order) through the Bakery facade, so any subscribed observer persists it
like any other change.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from bakery_ledger.services.bakery import Bakery
from bakery_ledger.utils.datetime_utils import today

# Stock and min_stock are base units; cost_per_unit is per display unit.
SAMPLE_INGREDIENTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Flour",
        "current_stock": "50000",
        "unit": "kg",
        "cost_per_unit": "1.50",
        "min_stock": "10000",
    },
    {
        "id": "2",
        "name": "Sugar",
        "current_stock": "8000",
        "unit": "kg",
        "cost_per_unit": "2.00",
        "min_stock": "10000",
    },
    {
        "id": "3",
        "name": "Eggs",
        "current_stock": "150",
        "unit": "u",
        "cost_per_unit": "0.20",
        "min_stock": "30",
    },
    {
        "id": "4",
        "name": "Milk",
        "current_stock": "12000",
        "unit": "L",
        "cost_per_unit": "1.20",
        "min_stock": "5000",
    },
    {
        "id": "5",
        "name": "Chocolate",
        "current_stock": "2500",
        "unit": "kg",
        "cost_per_unit": "15.00",
        "min_stock": "3000",
    },
]

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "p1",
        "name": "Chocolate Cake",
        "price": "35",
        "description": "Moist chocolate layer cake",
        "recipe": [
            {"ingredient_id": "1", "quantity": "500", "unit": "g"},
            {"ingredient_id": "2", "quantity": "400", "unit": "g"},
            {"ingredient_id": "3", "quantity": "4", "unit": "u"},
            {"ingredient_id": "5", "quantity": "200", "unit": "g"},
            {"ingredient_id": "4", "quantity": "250", "unit": "ml"},
        ],
    },
    {
        "id": "p2",
        "name": "Dozen Croissants",
        "price": "12",
        "description": "Twelve butter croissants",
        "recipe": [
            {"ingredient_id": "1", "quantity": "600", "unit": "g"},
            {"ingredient_id": "2", "quantity": "200", "unit": "g"},
            {"ingredient_id": "3", "quantity": "2", "unit": "u"},
            {"ingredient_id": "4", "quantity": "300", "unit": "ml"},
        ],
    },
]

SAMPLE_ORDERS: List[Dict[str, Any]] = [
    {
        "order_id": "o1",
        "customer_name": "Juan Pérez",
        "lines": [
            {"product_id": "p1", "quantity": 1},
            {"product_id": "p2", "quantity": 1},
        ],
    },
]


def load_sample_data(bakery: Bakery, delivery_date: Optional[date] = None) -> Dict[str, int]:
    """
    Load the starter data set into an empty bakery.

    Args:
        bakery: Facade to load into
        delivery_date: Delivery date for the sample orders (default today)

    Returns:
        Dictionary with counts of created entities

    Raises:
        DuplicateId: If any sample record already exists
    """
    delivery_date = delivery_date or today()
    counts = {"ingredients": 0, "products": 0, "orders": 0}

    for data in SAMPLE_INGREDIENTS:
        bakery.add_ingredient(data)
        counts["ingredients"] += 1

    for data in SAMPLE_PRODUCTS:
        bakery.add_product(data)
        counts["products"] += 1

    for data in SAMPLE_ORDERS:
        bakery.create_order(
            data["customer_name"],
            delivery_date,
            data["lines"],
            order_id=data["order_id"],
        )
        counts["orders"] += 1

    return counts
