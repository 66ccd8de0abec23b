"""Customer model for the customer directory."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Customer:
    """
    Customer directory entry.

    Attributes:
        id: Stable identifier
        name: Customer name; orders refer to customers by name
        phone: Optional contact number
    """

    id: str
    name: str
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        return cls(id=str(data["id"]), name=data["name"], phone=data.get("phone"))
