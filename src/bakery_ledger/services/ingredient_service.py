"""Ingredient Service - Ingredient ledger with weighted-average costing.

This module provides business logic for raw-material records: creation,
edits, stock level changes with weighted-average cost recalculation, and
clamped deduction when orders consume stock.

All functions operate on a BakeryState passed by the caller and validate
their inputs before mutating anything.

Key Rules:
- Stock and min_stock are base units (g, ml, u)
- cost_per_unit is money per one display unit (e.g., per kg)
- Cost is recalculated only when stock rises AND a positive purchase
  cost is supplied; corrections and decreases keep the cost basis
- Deductions clamp at zero instead of failing

Example Usage:
      >>> from decimal import Decimal
      >>> from bakery_ledger.models import BakeryState
      >>> state = BakeryState()
      >>> _ = add_ingredient(state, {
      ...     "id": "1", "name": "Flour", "unit": "kg",
      ...     "current_stock": 10000, "cost_per_unit": "1.50", "min_stock": 5000,
      ... })
      >>> set_stock_level(state, "1", Decimal("20000"), Decimal("2.00")).cost_per_unit
      Decimal('1.75')
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from bakery_ledger.models import BakeryState, Ingredient
from bakery_ledger.utils.constants import MAX_NAME_LENGTH
from bakery_ledger.utils.validators import (
    to_decimal,
    validate_non_negative_number,
    validate_positive_number,
    validate_required_string,
    validate_string_length,
)

from .exceptions import (
    DuplicateId,
    IncompatibleUnitFamily,
    IngredientNotFound,
    InvalidQuantity,
    ValidationError,
)
from .logging_utils import get_service_logger, log_operation
from .unit_converter import from_base, parse_unit, round_money, to_base

logger = get_service_logger(__name__)

EDITABLE_FIELDS = ("name", "unit", "cost_per_unit", "min_stock")


def _require_non_negative(value: Any, field: str) -> Decimal:
    is_valid, error = validate_non_negative_number(value, field)
    if not is_valid:
        raise InvalidQuantity(field, value, error)
    return to_decimal(value)


def _validate_name(name: Any) -> List[str]:
    errors = []
    for is_valid, error in (
        validate_required_string(name, "Name"),
        validate_string_length(name, MAX_NAME_LENGTH, "Name"),
    ):
        if not is_valid:
            errors.append(error)
    return errors


# ============================================================================
# Queries
# ============================================================================


def get_ingredient(state: BakeryState, ingredient_id: str) -> Ingredient:
    """Retrieve an ingredient by ID.

    Raises:
        IngredientNotFound: If ingredient_id doesn't exist
    """
    ingredient = state.ingredients.get(ingredient_id)
    if ingredient is None:
        raise IngredientNotFound(ingredient_id)
    return ingredient


def get_all_ingredients(state: BakeryState, search: Optional[str] = None) -> List[Ingredient]:
    """List ingredients, optionally filtered by a case-insensitive name search."""
    ingredients = list(state.ingredients.values())
    if search:
        needle = search.strip().lower()
        ingredients = [i for i in ingredients if needle in i.name.lower()]
    return ingredients


def get_low_stock_ingredients(state: BakeryState) -> List[Ingredient]:
    """Ingredients whose current stock is at or below min_stock.

    Both fields are base units, so they are compared directly. The list is
    rebuilt on every call.
    """
    return [i for i in state.ingredients.values() if i.current_stock <= i.min_stock]


# ============================================================================
# Commands
# ============================================================================


def add_ingredient(
    state: BakeryState, ingredient_data: Union[Ingredient, Dict[str, Any]]
) -> Ingredient:
    """Add a new ingredient with a caller-supplied ID.

    Args:
        state: Domain state to mutate
        ingredient_data: Ingredient, or dict with keys id, name, unit and
            optional current_stock (base units), cost_per_unit (per display
            unit) and min_stock (base units)

    Returns:
        Ingredient: The stored record

    Raises:
        DuplicateId: If the ID is already used
        UnknownUnit: If unit is not recognized
        InvalidQuantity: If an amount is negative or not finite
        ValidationError: If id or name are missing
    """
    data = ingredient_data.to_dict() if isinstance(ingredient_data, Ingredient) else ingredient_data

    ingredient_id = data.get("id")
    errors = []
    is_valid, error = validate_required_string(ingredient_id, "ID")
    if not is_valid:
        errors.append(error)
    errors.extend(_validate_name(data.get("name")))
    if errors:
        raise ValidationError(errors)

    ingredient_id = str(ingredient_id).strip()
    if ingredient_id in state.ingredients:
        raise DuplicateId("Ingredient", ingredient_id)

    unit = parse_unit(data.get("unit"))
    ingredient = Ingredient(
        id=ingredient_id,
        name=data["name"].strip(),
        current_stock=_require_non_negative(data.get("current_stock", 0), "current_stock"),
        unit=unit,
        cost_per_unit=_require_non_negative(data.get("cost_per_unit", 0), "cost_per_unit"),
        min_stock=_require_non_negative(data.get("min_stock", 0), "min_stock"),
    )
    state.ingredients[ingredient.id] = ingredient

    log_operation(logger, operation="add_ingredient", outcome="success", ingredient_id=ingredient.id)
    return ingredient


def update_ingredient(
    state: BakeryState, ingredient_id: str, ingredient_data: Dict[str, Any]
) -> Ingredient:
    """Edit an ingredient's descriptive fields.

    Only name, unit, cost_per_unit and min_stock can change. Stock moves go
    through set_stock_level() so the cost rules apply.

    Args:
        state: Domain state to mutate
        ingredient_id: Ingredient to edit
        ingredient_data: Partial dict of fields to change

    Returns:
        Ingredient: The updated record

    Raises:
        IngredientNotFound: If ingredient_id doesn't exist
        ValidationError: If a non-editable field is supplied or name is empty
        IncompatibleUnitFamily: If the new unit is in a different family
        InvalidQuantity: If cost_per_unit or min_stock is invalid
    """
    ingredient = get_ingredient(state, ingredient_id)

    rejected = sorted(set(ingredient_data) - set(EDITABLE_FIELDS))
    if rejected:
        raise ValidationError([f"Field cannot be edited: {name}" for name in rejected])
    if "name" in ingredient_data:
        errors = _validate_name(ingredient_data["name"])
        if errors:
            raise ValidationError(errors)

    changes: Dict[str, Any] = {}
    if "unit" in ingredient_data:
        unit = parse_unit(ingredient_data["unit"])
        if unit.family != ingredient.unit.family:
            raise IncompatibleUnitFamily(ingredient.unit, unit)
        changes["unit"] = unit
    if "cost_per_unit" in ingredient_data:
        changes["cost_per_unit"] = _require_non_negative(
            ingredient_data["cost_per_unit"], "cost_per_unit"
        )
    if "min_stock" in ingredient_data:
        changes["min_stock"] = _require_non_negative(ingredient_data["min_stock"], "min_stock")
    if "name" in ingredient_data:
        changes["name"] = ingredient_data["name"].strip()

    for attr, value in changes.items():
        setattr(ingredient, attr, value)

    log_operation(
        logger,
        operation="update_ingredient",
        outcome="success",
        ingredient_id=ingredient.id,
        fields=sorted(changes),
    )
    return ingredient


def set_stock_level(
    state: BakeryState,
    ingredient_id: str,
    new_base_amount: Any,
    purchase_unit_cost: Optional[Any] = None,
) -> Ingredient:
    """Set an ingredient's stock, recalculating weighted-average cost on purchases.

    **CRITICAL FUNCTION**: cost basis rules.

    Algorithm (only when new_base_amount > current_stock and
    purchase_unit_cost > 0):
        1. added_base = new_base_amount - current_stock
        2. Convert current, added and new totals to the display unit
        3. old_value = current_display * cost_per_unit
        4. added_value = added_display * purchase_unit_cost
        5. new_cost = (old_value + added_value) / new_total_display,
           keeping the prior cost if new_total_display is zero
        6. Round new_cost to cents

    In every other case only the stock changes.

    Args:
        state: Domain state to mutate
        ingredient_id: Ingredient to update
        new_base_amount: New total stock in base units
        purchase_unit_cost: Optional price paid per display unit for the
            added stock

    Returns:
        Ingredient: The updated record

    Raises:
        IngredientNotFound: If ingredient_id doesn't exist
        InvalidQuantity: If new_base_amount is negative or not finite, or
            purchase_unit_cost is not finite
    """
    ingredient = get_ingredient(state, ingredient_id)
    new_amount = _require_non_negative(new_base_amount, "new_base_amount")

    purchase_cost = None
    if purchase_unit_cost is not None:
        purchase_cost = to_decimal(purchase_unit_cost)
        if purchase_cost is None:
            raise InvalidQuantity("purchase_unit_cost", purchase_unit_cost, "not a finite number")

    previous_stock = ingredient.current_stock
    previous_cost = ingredient.cost_per_unit

    if new_amount > previous_stock and purchase_cost is not None and purchase_cost > 0:
        added_base = new_amount - previous_stock
        current_display = from_base(previous_stock, ingredient.unit).amount
        added_display = from_base(added_base, ingredient.unit).amount
        new_total_display = from_base(new_amount, ingredient.unit).amount

        old_value = current_display * previous_cost
        added_value = added_display * purchase_cost

        if new_total_display != 0:
            ingredient.cost_per_unit = round_money((old_value + added_value) / new_total_display)

    ingredient.current_stock = new_amount

    log_operation(
        logger,
        operation="set_stock_level",
        outcome="cost_recalculated" if ingredient.cost_per_unit != previous_cost else "success",
        ingredient_id=ingredient.id,
        previous_stock=str(previous_stock),
        new_stock=str(new_amount),
        previous_cost=str(previous_cost),
        new_cost=str(ingredient.cost_per_unit),
    )
    return ingredient


def restock(
    state: BakeryState,
    ingredient_id: str,
    added_quantity: Any,
    unit: Any,
    purchase_unit_cost: Optional[Any] = None,
) -> Ingredient:
    """Record a purchase expressed in any unit of the ingredient's family.

    Converts the purchase to base units and delegates to set_stock_level()
    with current_stock + added.

    Args:
        state: Domain state to mutate
        ingredient_id: Ingredient being purchased
        added_quantity: Amount bought, must be positive
        unit: Unit of added_quantity
        purchase_unit_cost: Optional price per display unit

    Raises:
        IngredientNotFound: If ingredient_id doesn't exist
        InvalidQuantity: If added_quantity is not positive
        IncompatibleUnitFamily: If unit doesn't match the ingredient's family
    """
    ingredient = get_ingredient(state, ingredient_id)

    is_valid, error = validate_positive_number(added_quantity, "added_quantity")
    if not is_valid:
        raise InvalidQuantity("added_quantity", added_quantity, error)

    purchase_unit = parse_unit(unit)
    if purchase_unit.family != ingredient.unit.family:
        raise IncompatibleUnitFamily(purchase_unit, ingredient.unit)

    added = to_base(added_quantity, purchase_unit)
    new_total = ingredient.stock + added
    return set_stock_level(state, ingredient_id, new_total.amount, purchase_unit_cost)


def deduct_stock(state: BakeryState, ingredient_id: str, base_amount: Any) -> Ingredient:
    """Remove stock, clamping at zero.

    Over-deduction is tolerated (a recipe may have changed after stock ran
    low) so the triggering order transition never fails here.

    Args:
        state: Domain state to mutate
        ingredient_id: Ingredient to deduct from
        base_amount: Amount to remove in base units

    Returns:
        Ingredient: The updated record

    Raises:
        IngredientNotFound: If ingredient_id doesn't exist
        InvalidQuantity: If base_amount is negative or not finite
    """
    ingredient = get_ingredient(state, ingredient_id)
    amount = _require_non_negative(base_amount, "base_amount")

    remaining = ingredient.current_stock - amount
    if remaining < 0:
        log_operation(
            logger,
            operation="deduct_stock",
            outcome="clamped_to_zero",
            level=logging.WARNING,
            ingredient_id=ingredient.id,
            requested=str(amount),
            available=str(ingredient.current_stock),
        )
        remaining = Decimal("0")

    ingredient.current_stock = remaining
    return ingredient
