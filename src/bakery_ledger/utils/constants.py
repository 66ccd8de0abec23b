"""
Constants for the Bakery Ledger application.

This module defines all system-wide constants including:
- Application metadata
- Unit scale factors (mass, volume, count)
- Persistence keys for the state store
- Money precision
- Validation limits and error messages
"""

from decimal import Decimal
from typing import Dict, List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Bakery Ledger"
APP_VERSION = "0.1.0"
DATABASE_VERSION = "1.0"
DATABASE_FILENAME = "bakery_ledger.db"

# ============================================================================
# Units
# ============================================================================

# Scale factor from each unit to its family base unit.
MASS_TO_GRAMS: Dict[str, int] = {
    "g": 1,
    "kg": 1000,
}

VOLUME_TO_ML: Dict[str, int] = {
    "ml": 1,
    "L": 1000,
}

COUNT_TO_ITEMS: Dict[str, int] = {
    "u": 1,
}

UNIT_LABELS: Dict[str, str] = {
    "g": "Grams (g)",
    "kg": "Kilograms (kg)",
    "ml": "Milliliters (ml)",
    "L": "Liters (L)",
    "u": "Units (u)",
}

ALL_UNITS: List[str] = list(MASS_TO_GRAMS) + list(VOLUME_TO_ML) + list(COUNT_TO_ITEMS)

# ============================================================================
# Money
# ============================================================================

CURRENCY_SYMBOL = "$"
CURRENCY_PLACES = 2
MONEY_QUANTUM = Decimal("0.01")

# ============================================================================
# State Store Keys
# ============================================================================

STATE_KEY_INGREDIENTS = "ingredients"
STATE_KEY_PRODUCTS = "products"
STATE_KEY_ORDERS = "orders"
STATE_KEY_CUSTOMERS = "customers"

ALL_STATE_KEYS: List[str] = [
    STATE_KEY_INGREDIENTS,
    STATE_KEY_PRODUCTS,
    STATE_KEY_ORDERS,
    STATE_KEY_CUSTOMERS,
]

SNAPSHOT_VERSION = "1.0"

# ============================================================================
# Validation
# ============================================================================

MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Please enter a valid number"
ERROR_INVALID_POSITIVE = "Value must be greater than zero"
ERROR_INVALID_NON_NEGATIVE = "Value must be zero or greater"
ERROR_INVALID_INTEGER = "Value must be a whole number"
ERROR_INVALID_UNIT = "Invalid unit type"
