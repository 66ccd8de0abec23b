"""Tests for the customer directory."""

import pytest

from bakery_ledger.services import customer_service
from bakery_ledger.services.exceptions import DuplicateId, ValidationError


class TestCustomerDirectory:
    """Tests for add/find/ensure."""

    def test_add_and_find(self, empty_state):
        customer = customer_service.add_customer(empty_state, " Ana ", phone="555-0101")
        assert customer.name == "Ana"
        assert customer.phone == "555-0101"
        assert customer_service.find_customer_by_name(empty_state, "ANA") is customer

    def test_find_missing(self, empty_state):
        assert customer_service.find_customer_by_name(empty_state, "Nobody") is None

    def test_duplicate_name_rejected(self, empty_state):
        customer_service.add_customer(empty_state, "Ana")
        with pytest.raises(ValidationError):
            customer_service.add_customer(empty_state, "ana")

    def test_duplicate_id_rejected(self, empty_state):
        customer_service.add_customer(empty_state, "Ana", customer_id="c1")
        with pytest.raises(DuplicateId):
            customer_service.add_customer(empty_state, "Bea", customer_id="c1")

    def test_empty_name_rejected(self, empty_state):
        with pytest.raises(ValidationError):
            customer_service.add_customer(empty_state, "")

    def test_ensure_customer_reuses_entry(self, empty_state):
        first = customer_service.ensure_customer(empty_state, "Ana")
        second = customer_service.ensure_customer(empty_state, "ana")
        assert first is second
        assert len(empty_state.customers) == 1

    def test_sorted_by_name(self, empty_state):
        for name in ("carla", "Ana", "Bea"):
            customer_service.add_customer(empty_state, name)
        names = [c.name for c in customer_service.get_all_customers(empty_state)]
        assert names == ["Ana", "Bea", "carla"]
