"""Bakery - command/query facade over the domain core.

The facade owns one BakeryState and is its sole mutator. Presentation code
(the CLI, a desktop or web front end) calls the commands and queries here
instead of touching the services directly.

After every successful command the facade notifies its observers with the
name of each changed collection and a fresh snapshot of it. Observers are
callables ``observer(key, snapshot)``; StateStoreObserver persists to
SQLite. An observer failure is logged and does not undo the mutation.

Example Usage:
      >>> bakery = Bakery()
      >>> bakery.subscribe(lambda key, snapshot: print(key, len(snapshot)))
      >>> _ = bakery.add_ingredient({"id": "1", "name": "Flour", "unit": "kg"})
      ingredients 1
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from bakery_ledger.models import (
    BakeryState,
    Customer,
    Ingredient,
    Order,
    OrderLine,
    OrderStatus,
    Product,
)
from bakery_ledger.utils.constants import (
    STATE_KEY_CUSTOMERS,
    STATE_KEY_INGREDIENTS,
    STATE_KEY_ORDERS,
    STATE_KEY_PRODUCTS,
)

from . import (
    customer_service,
    ingredient_service,
    order_service,
    recipe_service,
    reporting_service,
)
from .logging_utils import get_service_logger, log_operation
from .order_service import StatusChange
from .reporting_service import FinancialSummary, ProductionRequirement
from .snapshot_service import collection_to_snapshot, state_from_snapshot, state_to_snapshot

logger = get_service_logger(__name__)

Observer = Callable[[str, Any], None]


class Bakery:
    """Single-writer owner of the bakery domain state."""

    def __init__(self, state: Optional[BakeryState] = None, observers: Iterable[Observer] = ()):
        self._state = state if state is not None else BakeryState()
        self._observers: List[Observer] = list(observers)

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], observers: Iterable[Observer] = ()) -> "Bakery":
        """Build a facade from state_to_snapshot() output."""
        return cls(state_from_snapshot(snapshot), observers)

    @property
    def state(self) -> BakeryState:
        return self._state

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> None:
        """Register an observer notified after each successful mutation."""
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._observers.remove(observer)

    def _notify(self, *keys: str) -> None:
        for key in keys:
            snapshot = collection_to_snapshot(self._state, key)
            for observer in list(self._observers):
                try:
                    observer(key, snapshot)
                except Exception as e:
                    log_operation(
                        logger,
                        operation="notify_observer",
                        outcome="error",
                        level=logging.ERROR,
                        state_key=key,
                        error=str(e),
                    )

    def snapshot(self) -> Dict[str, Any]:
        """Full snapshot of every collection."""
        return state_to_snapshot(self._state)

    # ------------------------------------------------------------------
    # Ingredient commands and queries
    # ------------------------------------------------------------------

    def add_ingredient(self, ingredient_data: Union[Ingredient, Dict[str, Any]]) -> Ingredient:
        ingredient = ingredient_service.add_ingredient(self._state, ingredient_data)
        self._notify(STATE_KEY_INGREDIENTS)
        return ingredient

    def update_ingredient(self, ingredient_id: str, ingredient_data: Dict[str, Any]) -> Ingredient:
        ingredient = ingredient_service.update_ingredient(self._state, ingredient_id, ingredient_data)
        self._notify(STATE_KEY_INGREDIENTS)
        return ingredient

    def set_stock_level(
        self, ingredient_id: str, new_base_amount: Any, purchase_unit_cost: Optional[Any] = None
    ) -> Ingredient:
        ingredient = ingredient_service.set_stock_level(
            self._state, ingredient_id, new_base_amount, purchase_unit_cost
        )
        self._notify(STATE_KEY_INGREDIENTS)
        return ingredient

    def restock(
        self,
        ingredient_id: str,
        added_quantity: Any,
        unit: Any,
        purchase_unit_cost: Optional[Any] = None,
    ) -> Ingredient:
        ingredient = ingredient_service.restock(
            self._state, ingredient_id, added_quantity, unit, purchase_unit_cost
        )
        self._notify(STATE_KEY_INGREDIENTS)
        return ingredient

    def get_ingredient(self, ingredient_id: str) -> Ingredient:
        return ingredient_service.get_ingredient(self._state, ingredient_id)

    def get_ingredients(self, search: Optional[str] = None) -> List[Ingredient]:
        return ingredient_service.get_all_ingredients(self._state, search)

    # ------------------------------------------------------------------
    # Product commands and queries
    # ------------------------------------------------------------------

    def add_product(self, product_data: Union[Product, Dict[str, Any]]) -> Product:
        product = recipe_service.add_product(self._state, product_data)
        self._notify(STATE_KEY_PRODUCTS)
        return product

    def delete_product(self, product_id: str) -> Product:
        product = recipe_service.delete_product(self._state, product_id)
        self._notify(STATE_KEY_PRODUCTS)
        return product

    def get_product(self, product_id: str) -> Product:
        return recipe_service.get_product(self._state, product_id)

    def get_products(self) -> List[Product]:
        return recipe_service.get_all_products(self._state)

    def estimate_variable_cost(self, recipe_lines: Iterable[Any]) -> Decimal:
        return recipe_service.estimate_variable_cost(self._state, recipe_lines)

    def estimate_margin(self, product_id: str) -> Decimal:
        return recipe_service.estimate_margin(self._state, product_id)

    # ------------------------------------------------------------------
    # Order commands and queries
    # ------------------------------------------------------------------

    def create_order(
        self,
        customer_name: str,
        delivery_date: Union[date, str],
        lines: Iterable[Union[OrderLine, Dict[str, Any]]],
        order_id: Optional[str] = None,
    ) -> Order:
        known_customers = len(self._state.customers)
        order = order_service.create_order(
            self._state, customer_name, delivery_date, lines, order_id=order_id
        )
        if len(self._state.customers) != known_customers:
            self._notify(STATE_KEY_ORDERS, STATE_KEY_CUSTOMERS)
        else:
            self._notify(STATE_KEY_ORDERS)
        return order

    def set_order_status(self, order_id: str, new_status: Union[OrderStatus, str]) -> StatusChange:
        change = order_service.set_order_status(self._state, order_id, new_status)
        if change.stock_deducted:
            self._notify(STATE_KEY_ORDERS, STATE_KEY_INGREDIENTS)
        else:
            self._notify(STATE_KEY_ORDERS)
        return change

    def delete_order(self, order_id: str) -> Order:
        order = order_service.delete_order(self._state, order_id)
        self._notify(STATE_KEY_ORDERS)
        return order

    def get_order(self, order_id: str) -> Order:
        return order_service.get_order(self._state, order_id)

    def get_orders(self, statuses: Optional[Iterable[Union[OrderStatus, str]]] = None) -> List[Order]:
        if statuses is None:
            return order_service.get_all_orders(self._state)
        return order_service.get_orders_by_status(self._state, statuses)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def add_customer(self, name: str, phone: Optional[str] = None) -> Customer:
        customer = customer_service.add_customer(self._state, name, phone)
        self._notify(STATE_KEY_CUSTOMERS)
        return customer

    def get_customers(self) -> List[Customer]:
        return customer_service.get_all_customers(self._state)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def get_low_stock(self) -> List[Ingredient]:
        return reporting_service.get_low_stock(self._state)

    def get_financial_summary(self, on_date: Optional[date] = None) -> FinancialSummary:
        return reporting_service.get_financial_summary(self._state, on_date)

    def get_production_requirements(
        self, statuses: Iterable[Union[OrderStatus, str]] = reporting_service.OPEN_ORDER_STATUSES
    ) -> List[ProductionRequirement]:
        return reporting_service.get_production_requirements(self._state, statuses)
