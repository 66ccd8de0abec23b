"""Service layer exception classes for Bakery Ledger.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application. Every check runs before
state is touched, so a raised exception means nothing was mutated.

Exception Hierarchy:
    ServiceError (base)
    ├── UnknownUnit
    ├── IncompatibleUnitFamily
    ├── DuplicateId
    ├── NotFound
    │   ├── IngredientNotFound
    │   ├── ProductNotFound
    │   └── OrderNotFound
    ├── InvalidQuantity
    ├── ValidationError
    └── DatabaseError
"""

from typing import Any, List, Optional


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions inherit from this class.
    """

    pass


class UnknownUnit(ServiceError):
    """Raised when a unit is not one of the recognized units.

    Args:
        unit: The unrecognized unit value

    Example:
        >>> raise UnknownUnit("cup")
        UnknownUnit: Unknown unit: 'cup'
    """

    def __init__(self, unit: Any):
        self.unit = unit
        super().__init__(f"Unknown unit: '{unit}'")


class IncompatibleUnitFamily(ServiceError):
    """Raised when converting between units of different families.

    Args:
        from_unit: Source unit
        to_unit: Target unit

    Example:
        >>> raise IncompatibleUnitFamily("g", "L")
        IncompatibleUnitFamily: Cannot convert g to L: incompatible unit families
    """

    def __init__(self, from_unit: Any, to_unit: Any):
        self.from_unit = getattr(from_unit, "value", from_unit)
        self.to_unit = getattr(to_unit, "value", to_unit)
        super().__init__(
            f"Cannot convert {self.from_unit} to {self.to_unit}: incompatible unit families"
        )


class DuplicateId(ServiceError):
    """Raised when inserting a record whose id already exists.

    Args:
        entity: Entity type name (e.g., "Ingredient")
        entity_id: The colliding id
    """

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID '{entity_id}' already exists")


class NotFound(ServiceError):
    """Raised when a referenced record does not exist.

    Args:
        entity: Entity type name
        entity_id: The missing id
    """

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID '{entity_id}' not found")


class IngredientNotFound(NotFound):
    """Raised when an ingredient cannot be found by ID."""

    def __init__(self, ingredient_id: str):
        self.ingredient_id = ingredient_id
        super().__init__("Ingredient", ingredient_id)


class ProductNotFound(NotFound):
    """Raised when a product cannot be found by ID."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product", product_id)


class OrderNotFound(NotFound):
    """Raised when an order cannot be found by ID."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__("Order", order_id)


class InvalidQuantity(ServiceError):
    """Raised when an amount is negative or not a finite number.

    Args:
        field: Name of the offending field
        value: The rejected value
        reason: Optional explanation

    Example:
        >>> raise InvalidQuantity("new_base_amount", -5)
        InvalidQuantity: Invalid quantity for new_base_amount: -5
    """

    def __init__(self, field: str, value: Any, reason: Optional[str] = None):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"Invalid quantity for {field}: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when input validation fails for reasons other than quantities."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class DatabaseError(ServiceError):
    """Raised when a state store operation fails."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
