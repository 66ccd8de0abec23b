"""Snapshot Service - Lossless conversion between BakeryState and JSON data.

Snapshots are plain dicts/lists safe for json.dumps. Decimal amounts are
written as strings so stock (base units) and cost (per display unit)
survive a round trip exactly.

Snapshot layout:
    {
        "version": "1.0",
        "ingredients": [ {...}, ... ],
        "products": [ {...}, ... ],
        "orders": [ {...}, ... ],      # creation order
        "customers": [ {...}, ... ],
    }
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from bakery_ledger.models import BakeryState, Customer, Ingredient, Order, Product
from bakery_ledger.utils.constants import (
    ALL_STATE_KEYS,
    SNAPSHOT_VERSION,
    STATE_KEY_CUSTOMERS,
    STATE_KEY_INGREDIENTS,
    STATE_KEY_ORDERS,
    STATE_KEY_PRODUCTS,
)

from .exceptions import ValidationError

_RECORD_TYPES: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    STATE_KEY_INGREDIENTS: Ingredient.from_dict,
    STATE_KEY_PRODUCTS: Product.from_dict,
    STATE_KEY_ORDERS: Order.from_dict,
    STATE_KEY_CUSTOMERS: Customer.from_dict,
}


def _check_key(key: str) -> None:
    if key not in _RECORD_TYPES:
        raise ValidationError([f"Unknown state key: {key}"])


def collection_to_snapshot(state: BakeryState, key: str) -> List[Dict[str, Any]]:
    """Serialize one collection ("ingredients", "products", "orders", "customers")."""
    _check_key(key)
    return [record.to_dict() for record in getattr(state, key).values()]


def collection_from_snapshot(key: str, payload: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Rebuild one collection as an id -> record dict, preserving order.

    Raises:
        ValidationError: If the key is unknown or a record is malformed
    """
    _check_key(key)
    build = _RECORD_TYPES[key]
    if payload is not None and not isinstance(payload, list):
        raise ValidationError([f"{key}: expected a list of records"])
    records = {}
    for index, data in enumerate(payload or []):
        try:
            record = build(data)
        except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise ValidationError([f"{key}[{index}]: malformed record ({e})"])
        records[record.id] = record
    return records


def state_to_snapshot(state: BakeryState) -> Dict[str, Any]:
    """Serialize every collection into one snapshot dict."""
    snapshot: Dict[str, Any] = {"version": SNAPSHOT_VERSION}
    for key in ALL_STATE_KEYS:
        snapshot[key] = collection_to_snapshot(state, key)
    return snapshot


def state_from_snapshot(snapshot: Dict[str, Any]) -> BakeryState:
    """Rebuild a BakeryState from state_to_snapshot() output.

    Missing collections load as empty.

    Raises:
        ValidationError: If snapshot is not a dict or a record is malformed
    """
    if not isinstance(snapshot, dict):
        raise ValidationError(
            [f"Snapshot must be a JSON object, got {type(snapshot).__name__}"]
        )

    state = BakeryState()
    for key in ALL_STATE_KEYS:
        setattr(state, key, collection_from_snapshot(key, snapshot.get(key) or []))
    return state


def export_state_to_json(state: BakeryState, file_path: Union[str, Path]) -> Path:
    """Write a full snapshot to a JSON file and return its path."""
    path = Path(file_path)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(state_to_snapshot(state), fh, indent=2, ensure_ascii=False)
    return path


def import_state_from_json(file_path: Union[str, Path]) -> BakeryState:
    """Read a snapshot JSON file written by export_state_to_json().

    Raises:
        ValidationError: If the file cannot be read, is not valid JSON, or
            does not hold a snapshot
    """
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            snapshot = json.load(fh)
    except OSError as e:
        raise ValidationError([f"Cannot read {path}: {e.strerror or e}"])
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError([f"Invalid JSON in {path}: {e}"])
    return state_from_snapshot(snapshot)
