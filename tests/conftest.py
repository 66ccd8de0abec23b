"""Pytest configuration and fixtures for Bakery Ledger tests."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker

from bakery_ledger.models import BakeryState
from bakery_ledger.models.base import Base
from bakery_ledger.services.bakery import Bakery
from bakery_ledger.utils.config import reset_config
from bakery_ledger.utils.sample_data import load_sample_data

SAMPLE_DELIVERY_DATE = date(2024, 6, 14)


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Points the global session factory at it
    4. Drops all tables after the test completes
    """
    # Registers StateRecord with Base.metadata
    from bakery_ledger.models import state_record  # noqa: F401

    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import bakery_ledger.services.database as db_module

    original_get_session_factory = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session_factory


@pytest.fixture(scope="function")
def clean_config(monkeypatch):
    """Reset the config singleton and its environment variables around a test."""
    monkeypatch.delenv("BAKERY_LEDGER_ENV", raising=False)
    monkeypatch.delenv("BAKERY_LEDGER_DATA_DIR", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def empty_state():
    """A BakeryState with no records."""
    return BakeryState()


@pytest.fixture
def bakery():
    """A Bakery facade loaded with the sample data set and no observers.

    Sample order "o1" is due on SAMPLE_DELIVERY_DATE.
    """
    facade = Bakery()
    load_sample_data(facade, delivery_date=SAMPLE_DELIVERY_DATE)
    return facade


@pytest.fixture
def bakery_state(bakery):
    """The BakeryState behind the sample-data facade."""
    return bakery.state
