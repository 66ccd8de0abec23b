"""
Tests for the Reporting Service.

Tests cover:
- Revenue, loss and effectiveness rate
- Orders due on a date and pending count
- Low-stock membership
- Production requirements for open orders
"""

from datetime import date
from decimal import Decimal

from bakery_ledger.models import OrderLine, UnitType
from bakery_ledger.services import order_service, reporting_service


def _add_order(state, order_id, product_id, quantity, status, delivery=date(2024, 7, 1)):
    order_service.create_order(
        state, "Ana", delivery, [OrderLine(product_id, quantity)], order_id=order_id
    )
    order_service.set_order_status(state, order_id, status)


class TestFinancials:
    """Tests for revenue, loss and effectiveness."""

    def test_no_closed_orders_is_fully_effective(self, bakery_state):
        assert reporting_service.get_revenue(bakery_state) == Decimal("0")
        assert reporting_service.get_loss(bakery_state) == Decimal("0")
        assert reporting_service.get_effectiveness_rate(bakery_state) == Decimal("100")

    def test_empty_state_is_fully_effective(self, empty_state):
        assert reporting_service.get_effectiveness_rate(empty_state) == Decimal("100")

    def test_revenue_loss_and_rate(self, bakery_state):
        _add_order(bakery_state, "d1", "p1", 2, "Delivered")  # 70
        _add_order(bakery_state, "c1", "p2", 2, "Cancelled")  # 24
        _add_order(bakery_state, "x1", "p2", 1, "Completed")  # counts for neither

        assert reporting_service.get_revenue(bakery_state) == Decimal("70")
        assert reporting_service.get_loss(bakery_state) == Decimal("24")
        # 70 / 94 * 100 = 74.468...
        assert reporting_service.get_effectiveness_rate(bakery_state) == Decimal("74.47")

    def test_only_cancelled_is_zero_rate(self, bakery_state):
        order_service.set_order_status(bakery_state, "o1", "Cancelled")
        assert reporting_service.get_effectiveness_rate(bakery_state) == Decimal("0.00")


class TestCounts:
    """Tests for order counts."""

    def test_orders_for_date(self, bakery_state):
        sample_date = bakery_state.orders["o1"].delivery_date
        _add_order(bakery_state, "o2", "p1", 1, "Pending", delivery=sample_date)
        _add_order(bakery_state, "o3", "p1", 1, "Pending")
        assert reporting_service.count_orders_for_date(bakery_state, sample_date) == 2
        assert reporting_service.count_orders_for_date(bakery_state, date(2024, 7, 1)) == 1

    def test_pending_count(self, bakery_state):
        _add_order(bakery_state, "o2", "p1", 1, "InProgress")
        assert reporting_service.count_pending_orders(bakery_state) == 1

    def test_financial_summary(self, bakery_state):
        summary = reporting_service.get_financial_summary(
            bakery_state, bakery_state.orders["o1"].delivery_date
        )
        assert summary.revenue == Decimal("0")
        assert summary.loss == Decimal("0")
        assert summary.effectiveness_rate == Decimal("100")
        assert summary.orders_today == 1
        assert summary.pending_orders == 1
        assert summary.low_stock_count == 2


class TestLowStock:
    """Tests for low-stock alerts."""

    def test_sample_low_stock(self, bakery_state):
        names = [i.name for i in reporting_service.get_low_stock(bakery_state)]
        assert names == ["Sugar", "Chocolate"]

    def test_low_stock_reflects_completion(self, bakery_state):
        bakery_state.ingredients["3"].current_stock = Decimal("34")
        assert "Eggs" not in [i.name for i in reporting_service.get_low_stock(bakery_state)]

        order_service.set_order_status(bakery_state, "o1", "Completed")
        assert "Eggs" in [i.name for i in reporting_service.get_low_stock(bakery_state)]


class TestProductionRequirements:
    """Tests for get_production_requirements()."""

    def test_requirements_for_sample_order(self, bakery_state):
        rows = {r.ingredient_id: r for r in reporting_service.get_production_requirements(bakery_state)}
        assert rows["1"].total_needed == Decimal("1100")
        assert rows["1"].missing == Decimal("0")
        assert rows["1"].unit is UnitType.KILOGRAMS
        assert rows["1"].total_needed_display == Decimal("1.1")

    def test_requirements_sorted_by_shortfall(self, bakery_state):
        _add_order(bakery_state, "big", "p1", 15, "InProgress")
        rows = reporting_service.get_production_requirements(bakery_state)
        # 16 cakes need 3200 g chocolate; 2500 g on hand
        assert rows[0].ingredient_name == "Chocolate"
        assert rows[0].missing == Decimal("700")
        assert rows[0].missing_display == Decimal("0.7")
        assert all(r.missing == 0 for r in rows[1:])

    def test_closed_orders_are_ignored(self, bakery_state):
        order_service.set_order_status(bakery_state, "o1", "Delivered")
        assert reporting_service.get_production_requirements(bakery_state) == []
