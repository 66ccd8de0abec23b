"""
SQLite engine and session management for the state store.

Only services.state_store talks to the database; the domain services work
on an in-memory BakeryState and never open a session.

This module provides:
- Engine creation from the configured database URL
- A lazily built global engine and session factory
- session_scope() transactional context manager
- Schema creation, verification and reset
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models.base import Base
from ..models.state_record import StateRecord
from ..utils.config import get_config

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


def _is_memory_url(database_url: str) -> bool:
    return ":memory:" in database_url or "mode=memory" in database_url


@event.listens_for(Engine, "connect")
def _configure_sqlite_connection(dbapi_connection, connection_record):
    """Apply journaling pragmas to every new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_database_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Build an engine for `database_url` (default: the configured URL).

    In-memory databases share one connection through StaticPool so every
    session sees the same data; file databases get their directory created.
    """
    if database_url is None:
        config = get_config()
        database_url = config.database_url
        if not _is_memory_url(database_url):
            config.ensure_directories()

    logger.info(f"Creating database engine: {database_url}")

    connect_args = {"check_same_thread": False}
    if _is_memory_url(database_url):
        return create_engine(
            database_url, echo=echo, connect_args=connect_args, poolclass=StaticPool
        )

    connect_args["timeout"] = 30
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def get_engine(force_recreate: bool = False) -> Engine:
    """Return the global engine, creating it on first use."""
    global _engine

    if _engine is None or force_recreate:
        _engine = create_database_engine()

    return _engine


def get_session_factory() -> sessionmaker:
    """Return the global session factory bound to get_engine()."""
    global _SessionFactory

    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)

    return _SessionFactory


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Provide a transactional scope for state store operations.

    Commits when the block exits normally, rolls back and re-raises on any
    exception, and always closes the session.

    Example:
        with session_scope() as session:
            session.add(StateRecord(key="orders", payload=[], version="1.0"))
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database(engine: Optional[Engine] = None) -> None:
    """Create the state_records table if missing. Safe to call repeatedly."""
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema ready")


def verify_database(engine: Optional[Engine] = None) -> bool:
    """True when the database is reachable and holds the state_records table."""
    try:
        table_names = inspect(engine or get_engine()).get_table_names()
    except Exception as e:
        logger.error(f"Database verification failed: {e}")
        return False
    return StateRecord.__tablename__ in table_names


def reset_database(confirm: bool = False) -> None:
    """
    Drop and recreate the schema, discarding every stored snapshot.

    Raises:
        ValueError: If confirm is not True
    """
    if not confirm:
        raise ValueError("Must pass confirm=True to reset database. This will delete all data!")

    logger.warning("Resetting database: all stored snapshots will be lost")
    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)


def close_connections() -> None:
    """Dispose of the global engine and forget the session factory."""
    global _engine, _SessionFactory

    _SessionFactory = None
    if _engine is not None:
        _engine.dispose()
        _engine = None
    logger.info("Database connections closed")


def initialize_app_database() -> Engine:
    """
    Open the configured database and make sure its schema exists.

    Entry point used by the CLI before loading state.

    Returns:
        The global engine
    """
    config = get_config()
    if config.database_url.endswith(":memory:"):
        logger.info("Using in-memory database")
    elif config.database_exists():
        logger.info(f"Using existing database at: {config.database_path}")
    else:
        logger.info(f"Creating new database at: {config.database_path}")

    engine = get_engine()
    init_database(engine)
    if not verify_database(engine):
        logger.warning("Database verification failed - state table missing")
    return engine
