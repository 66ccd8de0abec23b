"""
Order and OrderLine models.

The order total is captured when the order is created and never
recomputed, so later price edits on a product leave existing orders alone.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from .enums import OrderStatus


@dataclass
class OrderLine:
    """
    One product line of an order.

    Attributes:
        product_id: Referenced product; may no longer resolve if the
            product was deleted after the order was created
        quantity: Number of product units ordered
    """

    product_id: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"product_id": self.product_id, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderLine":
        return cls(product_id=str(data["product_id"]), quantity=int(data["quantity"]))


@dataclass
class Order:
    """
    Customer order.

    Attributes:
        id: Stable identifier
        customer_name: Name of the ordering customer
        delivery_date: Date the order is due
        status: Current OrderStatus
        lines: Ordered product lines
        total_price: Sum of price * quantity captured at creation
    """

    id: str
    customer_name: str
    delivery_date: date
    status: OrderStatus = OrderStatus.PENDING
    lines: List[OrderLine] = field(default_factory=list)
    total_price: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "delivery_date": self.delivery_date.isoformat(),
            "status": self.status.value,
            "lines": [line.to_dict() for line in self.lines],
            "total_price": str(self.total_price),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            id=str(data["id"]),
            customer_name=data["customer_name"],
            delivery_date=date.fromisoformat(data["delivery_date"]),
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            lines=[OrderLine.from_dict(line) for line in data.get("lines", [])],
            total_price=Decimal(str(data.get("total_price", "0"))),
        )
