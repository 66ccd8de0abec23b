"""
Integration tests for the SQLite state store.

Tests cover:
- load_state/save_state against an in-memory database
- Whole-state save/load
- Error wrapping
"""

from decimal import Decimal

import pytest

from bakery_ledger.models import StateRecord
from bakery_ledger.services.exceptions import DatabaseError
from bakery_ledger.services.snapshot_service import state_to_snapshot
from bakery_ledger.services.state_store import (
    load_bakery_state,
    load_state,
    save_bakery_state,
    save_state,
)
from bakery_ledger.utils.constants import SNAPSHOT_VERSION


class TestStateStore:
    """Tests for load_state() / save_state()."""

    def test_load_missing_returns_default(self, test_db):
        assert load_state("orders") is None
        assert load_state("orders", default=[]) == []

    def test_save_then_load(self, test_db):
        payload = [{"id": "1", "name": "Flour", "current_stock": "50000"}]
        save_state("ingredients", payload)
        assert load_state("ingredients") == payload

    def test_save_replaces_previous(self, test_db):
        save_state("customers", [{"id": "c1", "name": "Ana", "phone": None}])
        save_state("customers", [])

        assert load_state("customers") == []
        session = test_db()
        records = session.query(StateRecord).filter(StateRecord.key == "customers").all()
        assert len(records) == 1
        assert records[0].version == SNAPSHOT_VERSION

        data = records[0].to_dict()
        assert data["key"] == "customers"
        assert data["payload"] == []
        assert isinstance(data["created_at"], str)

    def test_save_rejects_non_json(self, test_db):
        with pytest.raises(DatabaseError):
            save_state("ingredients", [{"current_stock": Decimal("1")}])
        assert load_state("ingredients") is None

    def test_whole_state_round_trip(self, test_db, bakery_state):
        save_bakery_state(bakery_state)
        restored = load_bakery_state()
        assert state_to_snapshot(restored) == state_to_snapshot(bakery_state)

    def test_load_empty_store(self, test_db):
        state = load_bakery_state()
        assert state.ingredients == {}
        assert state.customers == {}
