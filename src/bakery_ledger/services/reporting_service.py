"""Reporting Service - Read-only derivations over the domain state.

Every figure here is recomputed from current state on each call; nothing
is cached or stored.

Reports:
- Low-stock alerts
- Revenue (Delivered), loss (Cancelled) and effectiveness rate
- Orders due today and pending orders
- Production requirements for open orders
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from bakery_ledger.models import BakeryState, Ingredient, OrderStatus, UnitType
from bakery_ledger.utils.datetime_utils import today as current_date

from .ingredient_service import get_low_stock_ingredients
from .order_service import compute_order_usage, get_orders_by_status
from .unit_converter import from_base, round_money

HUNDRED = Decimal("100")

OPEN_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.IN_PROGRESS)


@dataclass
class FinancialSummary:
    """Dashboard figures.

    Attributes:
        revenue: Sum of total_price over Delivered orders
        loss: Sum of total_price over Cancelled orders
        effectiveness_rate: revenue / (revenue + loss) * 100; 100 when both are zero
        orders_today: Orders whose delivery date is today
        pending_orders: Orders with status Pending
        low_stock_count: Ingredients at or below their reorder threshold
    """

    revenue: Decimal
    loss: Decimal
    effectiveness_rate: Decimal
    orders_today: int
    pending_orders: int
    low_stock_count: int


@dataclass
class ProductionRequirement:
    """Ingredient demand of open orders versus stock on hand.

    Amounts are base units; `unit` is the ingredient's display unit.
    """

    ingredient_id: str
    ingredient_name: str
    total_needed: Decimal
    current_stock: Decimal
    unit: UnitType
    missing: Decimal

    @property
    def total_needed_display(self) -> Decimal:
        return from_base(self.total_needed, self.unit).amount

    @property
    def missing_display(self) -> Decimal:
        return from_base(self.missing, self.unit).amount


def get_low_stock(state: BakeryState) -> List[Ingredient]:
    """Low-stock alert set: current_stock <= min_stock."""
    return get_low_stock_ingredients(state)


def _sum_totals(state: BakeryState, status: OrderStatus) -> Decimal:
    return sum(
        (order.total_price for order in state.orders.values() if order.status == status),
        Decimal("0"),
    )


def get_revenue(state: BakeryState) -> Decimal:
    """Sum of total_price over Delivered orders."""
    return _sum_totals(state, OrderStatus.DELIVERED)


def get_loss(state: BakeryState) -> Decimal:
    """Sum of total_price over Cancelled orders."""
    return _sum_totals(state, OrderStatus.CANCELLED)


def get_effectiveness_rate(state: BakeryState) -> Decimal:
    """Revenue as a percentage of revenue plus loss.

    Exactly 100 when there are no Delivered and no Cancelled orders.
    """
    revenue = get_revenue(state)
    denominator = revenue + get_loss(state)
    if denominator == 0:
        return HUNDRED
    return round_money(revenue / denominator * HUNDRED)


def count_orders_for_date(state: BakeryState, on_date: Optional[date] = None) -> int:
    """Number of orders whose delivery date is `on_date` (default today)."""
    on_date = on_date or current_date()
    return sum(1 for order in state.orders.values() if order.delivery_date == on_date)


def count_pending_orders(state: BakeryState) -> int:
    """Number of orders with status Pending."""
    return sum(1 for order in state.orders.values() if order.status == OrderStatus.PENDING)


def get_financial_summary(state: BakeryState, on_date: Optional[date] = None) -> FinancialSummary:
    """Bundle the dashboard figures computed from current state."""
    return FinancialSummary(
        revenue=get_revenue(state),
        loss=get_loss(state),
        effectiveness_rate=get_effectiveness_rate(state),
        orders_today=count_orders_for_date(state, on_date),
        pending_orders=count_pending_orders(state),
        low_stock_count=len(get_low_stock(state)),
    )


def get_production_requirements(
    state: BakeryState,
    statuses: Iterable[Union[OrderStatus, str]] = OPEN_ORDER_STATUSES,
) -> List[ProductionRequirement]:
    """Project ingredient demand of orders still to be produced.

    Aggregates recipe usage over every order in `statuses` (Pending and
    InProgress by default) and compares it with stock on hand. Ingredients
    that no longer exist are left out.

    Returns:
        Requirements sorted with the largest shortfall first, then by name
    """
    needed = {}
    for order in get_orders_by_status(state, statuses):
        for ingredient_id, amount in compute_order_usage(state, order).items():
            needed[ingredient_id] = needed.get(ingredient_id, Decimal("0")) + amount

    requirements = []
    for ingredient_id, total_needed in needed.items():
        ingredient = state.ingredients.get(ingredient_id)
        if ingredient is None:
            continue
        requirements.append(
            ProductionRequirement(
                ingredient_id=ingredient.id,
                ingredient_name=ingredient.name,
                total_needed=total_needed,
                current_stock=ingredient.current_stock,
                unit=ingredient.unit,
                missing=max(Decimal("0"), total_needed - ingredient.current_stock),
            )
        )

    requirements.sort(key=lambda r: (-r.missing, r.ingredient_name.lower()))
    return requirements
