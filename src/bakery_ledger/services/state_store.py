"""State Store Service - SQLite persistence for state snapshots.

This is the persistence collaborator of the domain core. It offers two
operations:

- load_state(key, default=None): latest snapshot stored under key, or default
- save_state(key, snapshot): replace the snapshot stored under key

StateStoreObserver plugs these into the Bakery facade, which notifies it
after every successful mutation.

All functions accept an optional session for transaction composability;
without one they manage their own transaction via session_scope().
"""

import json
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bakery_ledger.models import BakeryState, StateRecord
from bakery_ledger.utils.constants import ALL_STATE_KEYS, SNAPSHOT_VERSION

from .database import session_scope
from .exceptions import DatabaseError
from .logging_utils import get_service_logger, log_operation
from .snapshot_service import collection_from_snapshot, collection_to_snapshot

logger = get_service_logger(__name__)


def load_state(key: str, default: Any = None, session: Optional[Session] = None) -> Any:
    """Load the snapshot stored under `key`.

    Args:
        key: Collection name
        default: Returned when nothing is stored under key
        session: Optional database session

    Returns:
        The stored JSON payload, or default

    Raises:
        DatabaseError: If the database operation fails
    """

    def _impl(sess: Session) -> Any:
        record = sess.query(StateRecord).filter(StateRecord.key == key).first()
        if record is None:
            return default
        return record.payload

    try:
        if session is not None:
            return _impl(session)
        with session_scope() as sess:
            return _impl(sess)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to load state '{key}'", original_error=e)


def save_state(key: str, snapshot: Any, session: Optional[Session] = None) -> None:
    """Store `snapshot` under `key`, replacing any previous snapshot.

    Args:
        key: Collection name
        snapshot: JSON-compatible payload
        session: Optional database session

    Raises:
        DatabaseError: If the payload is not JSON-compatible or the write fails
    """
    try:
        json.dumps(snapshot)
    except (TypeError, ValueError) as e:
        raise DatabaseError(f"State '{key}' is not JSON serializable", original_error=e)

    def _impl(sess: Session) -> None:
        record = sess.query(StateRecord).filter(StateRecord.key == key).first()
        if record is None:
            record = StateRecord(key=key, payload=snapshot, version=SNAPSHOT_VERSION)
            sess.add(record)
        else:
            record.payload = snapshot
            record.version = SNAPSHOT_VERSION
        sess.flush()

    try:
        if session is not None:
            _impl(session)
        else:
            with session_scope() as sess:
                _impl(sess)
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to save state '{key}'", original_error=e)

    log_operation(logger, operation="save_state", outcome="success", state_key=key)


def load_bakery_state() -> BakeryState:
    """Load every collection into a new BakeryState; missing ones are empty."""
    state = BakeryState()
    for key in ALL_STATE_KEYS:
        setattr(state, key, collection_from_snapshot(key, load_state(key, default=[])))
    return state


def save_bakery_state(state: BakeryState) -> None:
    """Persist every collection in one transaction."""
    with session_scope() as session:
        for key in ALL_STATE_KEYS:
            save_state(key, collection_to_snapshot(state, key), session=session)


class StateStoreObserver:
    """Persists the changed collection whenever the Bakery facade mutates.

    Example:
        >>> bakery = Bakery(load_bakery_state())
        >>> bakery.subscribe(StateStoreObserver())
    """

    def __call__(self, key: str, snapshot: Any) -> None:
        save_state(key, snapshot)
