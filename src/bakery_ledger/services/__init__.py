"""Services package - Business logic layer for Bakery Ledger.

This package contains the service modules that implement the bakery
domain rules over an in-memory BakeryState, plus the SQLite state store
that persists snapshots of it.

Architecture:
- Services: Stateless functions organized by domain (ingredient, recipe, order, reporting)
- Facade: Bakery owns the state and notifies observers after each mutation
- Exceptions: Consistent error handling via ServiceError hierarchy
- Validation: Input validation before any mutation

Service Modules:
- ingredient_service: Ingredient ledger and weighted-average costing
- recipe_service: Product catalog, recipe usage and cost estimates
- order_service: Order ledger and status state machine
- customer_service: Customer directory
- reporting_service: Low stock, financial summary, production requirements
- snapshot_service: State <-> JSON snapshot conversion

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- state_store: load_state/save_state persistence collaborator
- unit_converter: Unit conversion utilities
- logging_utils: Structured operation logging
"""

# Service modules
from . import (
    database,
    unit_converter,
    ingredient_service,
    recipe_service,
    customer_service,
    order_service,
    reporting_service,
    snapshot_service,
    state_store,
)

from .bakery import Bakery
from .order_service import StatusChange
from .reporting_service import FinancialSummary, ProductionRequirement
from .state_store import StateStoreObserver, load_state, save_state

# Exceptions
from .exceptions import (
    ServiceError,
    UnknownUnit,
    IncompatibleUnitFamily,
    DuplicateId,
    NotFound,
    IngredientNotFound,
    ProductNotFound,
    OrderNotFound,
    InvalidQuantity,
    ValidationError,
    DatabaseError,
)

__all__ = [
    # Modules
    "database",
    "unit_converter",
    "ingredient_service",
    "recipe_service",
    "customer_service",
    "order_service",
    "reporting_service",
    "snapshot_service",
    "state_store",
    # Facade
    "Bakery",
    "StatusChange",
    "FinancialSummary",
    "ProductionRequirement",
    "StateStoreObserver",
    "load_state",
    "save_state",
    # Exceptions
    "ServiceError",
    "UnknownUnit",
    "IncompatibleUnitFamily",
    "DuplicateId",
    "NotFound",
    "IngredientNotFound",
    "ProductNotFound",
    "OrderNotFound",
    "InvalidQuantity",
    "ValidationError",
    "DatabaseError",
]
