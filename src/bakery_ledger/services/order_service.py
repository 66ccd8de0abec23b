"""Order Service - Order ledger and the status state machine.

This module provides business logic for customer orders: creation with a
total fixed at creation time, status changes, and deletion.

Status Model:
    Statuses form a flat set (Pending, InProgress, Completed, Delivered,
    Cancelled) and any status may move to any other. Exactly one edge has
    an inventory effect: entering Completed from a status other than
    Completed consumes the recipe ingredients of every order line.

    - Completed -> Completed is a no-op and deducts nothing
    - Leaving Completed does not restore stock
    - Deleting an order does not restore stock

The deduction is computed and validated in full before the first
ingredient is touched, so callers never observe a partial deduction.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from bakery_ledger.models import BakeryState, Order, OrderLine, OrderStatus
from bakery_ledger.utils.datetime_utils import parse_date
from bakery_ledger.utils.constants import MAX_NAME_LENGTH
from bakery_ledger.utils.validators import (
    validate_positive_integer,
    validate_required_string,
    validate_string_length,
)

from .customer_service import ensure_customer
from .exceptions import (
    DuplicateId,
    IngredientNotFound,
    InvalidQuantity,
    OrderNotFound,
    ValidationError,
)
from .ingredient_service import deduct_stock
from .logging_utils import get_service_logger, log_operation
from .recipe_service import compute_usage, get_product, merge_usage

logger = get_service_logger(__name__)


@dataclass
class StatusChange:
    """Result of set_order_status().

    Attributes:
        order: The updated order
        previous_status: Status before the change
        new_status: Status after the change
        deductions: ingredient_id -> base amount deducted (empty unless the
            order entered Completed)
    """

    order: Order
    previous_status: OrderStatus
    new_status: OrderStatus
    deductions: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def stock_deducted(self) -> bool:
        return bool(self.deductions)


def _parse_status(status: Union[OrderStatus, str]) -> OrderStatus:
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError([f"Unknown order status: {status}"])


# ============================================================================
# Queries
# ============================================================================


def get_order(state: BakeryState, order_id: str) -> Order:
    """Retrieve an order by ID.

    Raises:
        OrderNotFound: If order_id doesn't exist
    """
    order = state.orders.get(order_id)
    if order is None:
        raise OrderNotFound(order_id)
    return order


def get_all_orders(state: BakeryState) -> List[Order]:
    """List orders, newest first."""
    return list(reversed(list(state.orders.values())))


def get_orders_by_status(
    state: BakeryState, statuses: Iterable[Union[OrderStatus, str]]
) -> List[Order]:
    """List orders whose status is one of `statuses`, newest first."""
    wanted = {_parse_status(status) for status in statuses}
    return [order for order in get_all_orders(state) if order.status in wanted]


def compute_order_usage(state: BakeryState, order: Order) -> Dict[str, Decimal]:
    """Aggregate base-unit ingredient usage over every line of an order.

    Lines whose product no longer exists are skipped.

    Returns:
        Dict mapping ingredient_id -> total base amount
    """
    usage: Dict[str, Decimal] = {}
    for line in order.lines:
        product = state.products.get(line.product_id)
        if product is None:
            continue
        merge_usage(usage, compute_usage(product, line.quantity))
    return usage


# ============================================================================
# Commands
# ============================================================================


def create_order(
    state: BakeryState,
    customer_name: str,
    delivery_date: Union[date, str],
    lines: Iterable[Union[OrderLine, Dict[str, Any]]],
    order_id: Optional[str] = None,
) -> Order:
    """Create a Pending order and fix its total.

    total_price = sum(product.price * quantity) using prices at this moment;
    later price edits do not change it.

    Args:
        state: Domain state to mutate
        customer_name: Ordering customer; added to the customer directory
            when new
        delivery_date: date or ISO string (YYYY-MM-DD)
        lines: OrderLine objects or dicts with product_id and quantity
        order_id: Optional ID; a random one is generated when omitted

    Returns:
        Order: The stored order

    Raises:
        ValidationError: If customer name, delivery date or lines are missing,
            or the customer name is too long
        InvalidQuantity: If a line quantity is not a positive whole number
        ProductNotFound: If a line references a missing product
        DuplicateId: If order_id is already used
    """
    errors = []
    name = customer_name.strip() if isinstance(customer_name, str) else customer_name
    for is_valid, error in (
        validate_required_string(name, "Customer"),
        validate_string_length(name, MAX_NAME_LENGTH, "Customer"),
    ):
        if not is_valid:
            errors.append(error)

    parsed_date = None
    if not delivery_date:
        errors.append("Delivery date: This field is required")
    else:
        try:
            parsed_date = parse_date(delivery_date)
        except (TypeError, ValueError):
            errors.append(f"Delivery date: Invalid date '{delivery_date}'")

    raw_lines = list(lines or [])
    if not raw_lines:
        errors.append("Order must contain at least one product")
    if errors:
        raise ValidationError(errors)

    if order_id is not None:
        order_id = str(order_id).strip()
        if order_id in state.orders:
            raise DuplicateId("Order", order_id)
    else:
        order_id = uuid.uuid4().hex

    order_lines = []
    total = Decimal("0")
    for index, raw in enumerate(raw_lines):
        if isinstance(raw, OrderLine):
            product_id, quantity = raw.product_id, raw.quantity
        else:
            product_id, quantity = raw["product_id"], raw["quantity"]

        field_name = f"lines[{index}].quantity"
        is_valid, error = validate_positive_integer(quantity, field_name)
        if not is_valid:
            raise InvalidQuantity(field_name, quantity, error)

        product = get_product(state, product_id)
        quantity = int(Decimal(str(quantity)))
        total += product.price * quantity
        order_lines.append(OrderLine(product_id=product.id, quantity=quantity))

    order = Order(
        id=order_id,
        customer_name=name,
        delivery_date=parsed_date,
        status=OrderStatus.PENDING,
        lines=order_lines,
        total_price=total,
    )
    ensure_customer(state, order.customer_name)
    state.orders[order.id] = order

    log_operation(
        logger,
        operation="create_order",
        outcome="success",
        order_id=order.id,
        total_price=str(order.total_price),
        line_count=len(order_lines),
    )
    return order


def set_order_status(
    state: BakeryState, order_id: str, new_status: Union[OrderStatus, str]
) -> StatusChange:
    """Move an order to a new status.

    **CRITICAL FUNCTION**: the only place stock is consumed by orders.

    When new_status is Completed and the current status is not Completed,
    the aggregated recipe usage of every line is deducted from stock once
    per ingredient (clamped at zero). Every other transition only changes
    the status.

    Args:
        state: Domain state to mutate
        order_id: Order to update
        new_status: Target OrderStatus (or its string value)

    Returns:
        StatusChange: previous/new status and any deductions applied

    Raises:
        OrderNotFound: If order_id doesn't exist
        ValidationError: If new_status is not a known status
        IngredientNotFound: If a recipe references an ingredient that no
            longer exists; nothing is deducted in that case
    """
    order = get_order(state, order_id)
    target = _parse_status(new_status)
    previous = order.status

    deductions: Dict[str, Decimal] = {}
    if target == OrderStatus.COMPLETED and previous != OrderStatus.COMPLETED:
        deductions = compute_order_usage(state, order)
        for ingredient_id in deductions:
            if ingredient_id not in state.ingredients:
                raise IngredientNotFound(ingredient_id)
        for ingredient_id, amount in deductions.items():
            deduct_stock(state, ingredient_id, amount)

    order.status = target

    log_operation(
        logger,
        operation="set_order_status",
        outcome="stock_deducted" if deductions else "success",
        order_id=order.id,
        previous_status=previous.value,
        new_status=target.value,
        deductions={key: str(value) for key, value in deductions.items()},
    )
    return StatusChange(
        order=order, previous_status=previous, new_status=target, deductions=deductions
    )


def delete_order(state: BakeryState, order_id: str) -> Order:
    """Remove an order. Stock already deducted for it stays deducted.

    Returns:
        Order: The removed order

    Raises:
        OrderNotFound: If order_id doesn't exist
    """
    order = get_order(state, order_id)
    del state.orders[order_id]

    log_operation(
        logger,
        operation="delete_order",
        outcome="success",
        order_id=order_id,
        status=order.status.value,
    )
    return order
