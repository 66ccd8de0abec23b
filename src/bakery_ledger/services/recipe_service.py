"""Recipe Service - Product catalog and recipe costing.

This module manages product definitions (bills of materials) and derives
from them:
- ingredient usage in base units for a number of product units
- an on-demand variable cost estimate from current ingredient costs

Deleting a product does not touch orders that reference it; readers treat
such order lines as unknown items and skip them.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Union

from bakery_ledger.models import BakeryState, Product, RecipeLine
from bakery_ledger.utils.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
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
    ProductNotFound,
    ValidationError,
)
from .logging_utils import get_service_logger, log_operation
from .unit_converter import convert, parse_unit, round_money, to_base

logger = get_service_logger(__name__)


# ============================================================================
# Queries
# ============================================================================


def get_product(state: BakeryState, product_id: str) -> Product:
    """Retrieve a product by ID.

    Raises:
        ProductNotFound: If product_id doesn't exist
    """
    product = state.products.get(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


def get_all_products(state: BakeryState) -> List[Product]:
    """List all products in creation order."""
    return list(state.products.values())


# ============================================================================
# Commands
# ============================================================================


def _build_recipe_line(state: BakeryState, index: int, line: Any) -> RecipeLine:
    """Validate one recipe line against the ingredient ledger."""
    if isinstance(line, RecipeLine):
        ingredient_id, quantity, unit = line.ingredient_id, line.quantity, line.unit
    else:
        ingredient_id, quantity, unit = line["ingredient_id"], line["quantity"], line["unit"]

    field = f"recipe[{index}].quantity"
    is_valid, error = validate_positive_number(quantity, field)
    if not is_valid:
        raise InvalidQuantity(field, quantity, error)

    ingredient = state.ingredients.get(ingredient_id)
    if ingredient is None:
        raise IngredientNotFound(ingredient_id)

    line_unit = parse_unit(unit)
    if line_unit.family != ingredient.unit.family:
        raise IncompatibleUnitFamily(line_unit, ingredient.unit)

    return RecipeLine(ingredient_id=ingredient.id, quantity=to_decimal(quantity), unit=line_unit)


def add_product(state: BakeryState, product_data: Union[Product, Dict[str, Any]]) -> Product:
    """Add a product definition.

    Args:
        state: Domain state to mutate
        product_data: Product, or dict with keys id, name, price, recipe
            (list of {ingredient_id, quantity, unit}) and optional description

    Returns:
        Product: The stored record

    Raises:
        ValidationError: If id or name are missing, or the description is too long
        DuplicateId: If the product ID is already used
        InvalidQuantity: If price is negative or a line quantity is not positive
        IngredientNotFound: If a line references a missing ingredient
        UnknownUnit: If a line unit is not recognized
        IncompatibleUnitFamily: If a line unit doesn't match its ingredient
    """
    if isinstance(product_data, Product):
        data = {
            "id": product_data.id,
            "name": product_data.name,
            "price": product_data.price,
            "recipe": product_data.recipe,
            "description": product_data.description,
        }
    else:
        data = product_data

    errors = []
    for is_valid, error in (
        validate_required_string(data.get("id"), "ID"),
        validate_required_string(data.get("name"), "Name"),
        validate_string_length(data.get("name"), MAX_NAME_LENGTH, "Name"),
        validate_string_length(data.get("description"), MAX_DESCRIPTION_LENGTH, "Description"),
    ):
        if not is_valid:
            errors.append(error)
    if errors:
        raise ValidationError(errors)

    product_id = str(data["id"]).strip()
    if product_id in state.products:
        raise DuplicateId("Product", product_id)

    price = data.get("price", 0)
    is_valid, error = validate_non_negative_number(price, "price")
    if not is_valid:
        raise InvalidQuantity("price", price, error)

    recipe = [
        _build_recipe_line(state, index, line) for index, line in enumerate(data.get("recipe") or [])
    ]

    product = Product(
        id=product_id,
        name=data["name"].strip(),
        price=to_decimal(price),
        recipe=recipe,
        description=data.get("description") or None,
    )
    state.products[product.id] = product

    log_operation(
        logger,
        operation="add_product",
        outcome="success",
        product_id=product.id,
        recipe_lines=len(recipe),
    )
    return product


def delete_product(state: BakeryState, product_id: str) -> Product:
    """Remove a product unconditionally.

    Orders referencing the product keep their lines and totals.

    Returns:
        Product: The removed record

    Raises:
        ProductNotFound: If product_id doesn't exist
    """
    product = get_product(state, product_id)
    del state.products[product_id]

    referencing = sum(
        1
        for order in state.orders.values()
        if any(line.product_id == product_id for line in order.lines)
    )
    log_operation(
        logger,
        operation="delete_product",
        outcome="success",
        product_id=product_id,
        referencing_orders=referencing,
    )
    return product


# ============================================================================
# Usage and Costing
# ============================================================================


def compute_usage(product: Product, multiplier: Any = 1) -> Dict[str, Decimal]:
    """Ingredient usage for `multiplier` units of a product.

    Each recipe line is converted to base units and scaled by the
    multiplier; lines sharing an ingredient add up.

    Args:
        product: Product whose recipe to expand
        multiplier: Number of product units (the ordered quantity)

    Returns:
        Dict mapping ingredient_id -> amount in base units, in recipe order

    Example:
        >>> # cake needs 500 g flour and 0.25 L milk
        >>> compute_usage(cake, 3)
        {"flour": Decimal("1500"), "milk": Decimal("750.00")}
    """
    factor = to_decimal(multiplier)
    if factor is None or factor < 0:
        raise InvalidQuantity("multiplier", multiplier, "must be zero or greater")

    usage: Dict[str, Decimal] = {}
    for line in product.recipe:
        amount = (to_base(line.quantity, line.unit) * factor).amount
        usage[line.ingredient_id] = usage.get(line.ingredient_id, Decimal("0")) + amount
    return usage


def merge_usage(target: Dict[str, Decimal], usage: Dict[str, Decimal]) -> Dict[str, Decimal]:
    """Add one usage mapping into another in place and return it."""
    for ingredient_id, amount in usage.items():
        target[ingredient_id] = target.get(ingredient_id, Decimal("0")) + amount
    return target


def estimate_variable_cost(state: BakeryState, recipe_lines: Iterable[Any]) -> Decimal:
    """Estimate the ingredient cost of one unit from current ingredient costs.

    Each line is converted into its ingredient's display unit (directly
    when units match, through the base unit otherwise) and priced at
    cost_per_unit. Lines whose ingredient no longer exists add nothing.
    The estimate is recomputed on every call and never stored.

    Args:
        state: Domain state to read
        recipe_lines: RecipeLine objects or dicts with ingredient_id,
            quantity and unit

    Returns:
        Decimal: Estimated cost rounded to cents

    Raises:
        UnknownUnit: If a line unit is not recognized
        IncompatibleUnitFamily: If a line unit doesn't match its ingredient
    """
    total = Decimal("0")
    for line in recipe_lines:
        if isinstance(line, RecipeLine):
            ingredient_id, quantity, unit = line.ingredient_id, line.quantity, line.unit
        else:
            ingredient_id, quantity, unit = line["ingredient_id"], line["quantity"], line["unit"]

        ingredient = state.ingredients.get(ingredient_id)
        if ingredient is None:
            continue

        line_unit = parse_unit(unit)
        if line_unit == ingredient.unit:
            display_amount = to_decimal(quantity)
            if display_amount is None:
                raise InvalidQuantity("quantity", quantity, "not a finite number")
        else:
            display_amount = convert(quantity, line_unit, ingredient.unit)
        total += display_amount * ingredient.cost_per_unit

    return round_money(total)


def estimate_margin(state: BakeryState, product_id: str) -> Decimal:
    """Price minus the estimated variable cost of one unit.

    Raises:
        ProductNotFound: If product_id doesn't exist
    """
    product = get_product(state, product_id)
    return round_money(product.price - estimate_variable_cost(state, product.recipe))
