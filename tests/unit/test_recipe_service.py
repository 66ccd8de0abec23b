"""
Tests for the Recipe Service.

Tests cover:
- add_product() validation of recipe lines
- delete_product() leaving orders untouched
- compute_usage() base-unit aggregation
- estimate_variable_cost() and estimate_margin()
"""

from decimal import Decimal

import pytest

from bakery_ledger.models import RecipeLine, UnitType
from bakery_ledger.services import recipe_service
from bakery_ledger.services.exceptions import (
    DuplicateId,
    IncompatibleUnitFamily,
    IngredientNotFound,
    InvalidQuantity,
    ProductNotFound,
    UnknownUnit,
    ValidationError,
)


def _product(**overrides):
    data = {
        "id": "p9",
        "name": "Milk Bread",
        "price": "8",
        "recipe": [
            {"ingredient_id": "1", "quantity": "0.4", "unit": "kg"},
            {"ingredient_id": "4", "quantity": "200", "unit": "ml"},
        ],
    }
    data.update(overrides)
    return data


class TestAddProduct:
    """Tests for add_product()."""

    def test_add_product(self, bakery_state):
        product = recipe_service.add_product(bakery_state, _product())
        assert product.price == Decimal("8")
        assert product.recipe[0] == RecipeLine("1", Decimal("0.4"), UnitType.KILOGRAMS)
        assert product.ingredient_ids == ["1", "4"]
        assert bakery_state.products["p9"] is product

    def test_add_product_duplicate_id(self, bakery_state):
        with pytest.raises(DuplicateId):
            recipe_service.add_product(bakery_state, _product(id="p1"))

    def test_add_product_missing_ingredient(self, bakery_state):
        recipe = [{"ingredient_id": "99", "quantity": "1", "unit": "g"}]
        with pytest.raises(IngredientNotFound):
            recipe_service.add_product(bakery_state, _product(recipe=recipe))
        assert "p9" not in bakery_state.products

    def test_add_product_unit_of_other_family(self, bakery_state):
        recipe = [{"ingredient_id": "1", "quantity": "1", "unit": "L"}]
        with pytest.raises(IncompatibleUnitFamily):
            recipe_service.add_product(bakery_state, _product(recipe=recipe))

    def test_add_product_unknown_unit(self, bakery_state):
        recipe = [{"ingredient_id": "1", "quantity": "1", "unit": "cup"}]
        with pytest.raises(UnknownUnit):
            recipe_service.add_product(bakery_state, _product(recipe=recipe))

    def test_add_product_zero_quantity(self, bakery_state):
        recipe = [{"ingredient_id": "1", "quantity": "0", "unit": "g"}]
        with pytest.raises(InvalidQuantity):
            recipe_service.add_product(bakery_state, _product(recipe=recipe))

    def test_add_product_negative_price(self, bakery_state):
        with pytest.raises(InvalidQuantity):
            recipe_service.add_product(bakery_state, _product(price="-1"))

    def test_add_product_missing_name(self, bakery_state):
        with pytest.raises(ValidationError):
            recipe_service.add_product(bakery_state, _product(name=""))


class TestDeleteProduct:
    """Tests for delete_product()."""

    def test_delete_keeps_referencing_orders(self, bakery_state):
        recipe_service.delete_product(bakery_state, "p1")
        assert "p1" not in bakery_state.products
        order = bakery_state.orders["o1"]
        assert [line.product_id for line in order.lines] == ["p1", "p2"]
        assert order.total_price == Decimal("47")

    def test_delete_missing(self, bakery_state):
        with pytest.raises(ProductNotFound):
            recipe_service.delete_product(bakery_state, "nope")


class TestComputeUsage:
    """Tests for compute_usage()."""

    def test_usage_in_base_units(self, bakery_state):
        usage = recipe_service.compute_usage(bakery_state.products["p1"], 2)
        assert usage == {
            "1": Decimal("1000"),
            "2": Decimal("800"),
            "3": Decimal("8"),
            "5": Decimal("400"),
            "4": Decimal("500"),
        }

    def test_usage_converts_display_units(self, bakery_state):
        product = recipe_service.add_product(bakery_state, _product())
        usage = recipe_service.compute_usage(product, 3)
        assert usage == {"1": Decimal("1200"), "4": Decimal("600")}

    def test_usage_aggregates_repeated_ingredient(self, bakery_state):
        recipe = [
            {"ingredient_id": "1", "quantity": "0.5", "unit": "kg"},
            {"ingredient_id": "1", "quantity": "250", "unit": "g"},
        ]
        product = recipe_service.add_product(bakery_state, _product(recipe=recipe))
        assert recipe_service.compute_usage(product) == {"1": Decimal("750")}

    def test_merge_usage(self):
        target = {"1": Decimal("100")}
        recipe_service.merge_usage(target, {"1": Decimal("50"), "2": Decimal("5")})
        assert target == {"1": Decimal("150"), "2": Decimal("5")}


class TestEstimates:
    """Tests for cost and margin estimates."""

    def test_variable_cost_of_cake(self, bakery_state):
        # flour 0.75 + sugar 0.80 + eggs 0.80 + chocolate 3.00 + milk 0.30
        cost = recipe_service.estimate_variable_cost(bakery_state, bakery_state.products["p1"].recipe)
        assert cost == Decimal("5.65")

    def test_variable_cost_of_croissants(self, bakery_state):
        cost = recipe_service.estimate_variable_cost(bakery_state, bakery_state.products["p2"].recipe)
        assert cost == Decimal("2.06")

    def test_variable_cost_follows_current_costs(self, bakery_state):
        bakery_state.ingredients["3"].cost_per_unit = Decimal("0.50")
        cost = recipe_service.estimate_variable_cost(
            bakery_state, [{"ingredient_id": "3", "quantity": "2", "unit": "u"}]
        )
        assert cost == Decimal("1.00")

    def test_variable_cost_skips_missing_ingredient(self, bakery_state):
        cost = recipe_service.estimate_variable_cost(
            bakery_state,
            [
                {"ingredient_id": "99", "quantity": "1", "unit": "kg"},
                {"ingredient_id": "1", "quantity": "1", "unit": "kg"},
            ],
        )
        assert cost == Decimal("1.50")

    def test_variable_cost_empty_recipe(self, bakery_state):
        assert recipe_service.estimate_variable_cost(bakery_state, []) == Decimal("0.00")

    def test_margin(self, bakery_state):
        assert recipe_service.estimate_margin(bakery_state, "p1") == Decimal("29.35")
