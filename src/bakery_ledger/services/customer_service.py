"""Customer Service - Customer directory.

Orders refer to customers by name. The directory keeps one entry per
distinct name (case-insensitive) so the presentation layer can offer
returning customers.
"""

import uuid
from typing import List, Optional

from bakery_ledger.models import BakeryState, Customer
from bakery_ledger.utils.constants import MAX_NAME_LENGTH
from bakery_ledger.utils.validators import validate_required_string, validate_string_length

from .exceptions import DuplicateId, ValidationError
from .logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)


def find_customer_by_name(state: BakeryState, name: str) -> Optional[Customer]:
    """Case-insensitive lookup by name; None when absent."""
    wanted = name.strip().lower()
    for customer in state.customers.values():
        if customer.name.lower() == wanted:
            return customer
    return None


def get_all_customers(state: BakeryState) -> List[Customer]:
    """List customers sorted by name."""
    return sorted(state.customers.values(), key=lambda c: c.name.lower())


def add_customer(
    state: BakeryState,
    name: str,
    phone: Optional[str] = None,
    customer_id: Optional[str] = None,
) -> Customer:
    """Add a customer to the directory.

    Raises:
        ValidationError: If name is empty/too long or already in the directory
        DuplicateId: If customer_id is already used
    """
    errors = []
    for is_valid, error in (
        validate_required_string(name, "Name"),
        validate_string_length(name, MAX_NAME_LENGTH, "Name"),
    ):
        if not is_valid:
            errors.append(error)
    if errors:
        raise ValidationError(errors)

    if find_customer_by_name(state, name) is not None:
        raise ValidationError([f"Customer '{name.strip()}' already exists"])

    if customer_id is None:
        customer_id = uuid.uuid4().hex
    elif customer_id in state.customers:
        raise DuplicateId("Customer", customer_id)

    customer = Customer(id=customer_id, name=name.strip(), phone=phone or None)
    state.customers[customer.id] = customer

    log_operation(logger, operation="add_customer", outcome="success", customer_id=customer.id)
    return customer


def ensure_customer(state: BakeryState, name: str) -> Customer:
    """Return the directory entry for `name`, creating it when new."""
    existing = find_customer_by_name(state, name)
    if existing is not None:
        return existing
    return add_customer(state, name)
