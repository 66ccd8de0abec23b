"""Date and time helpers.

Usage:
    from bakery_ledger.utils.datetime_utils import utc_now, today

    created_at = Column(DateTime, default=utc_now)
"""

from datetime import date, datetime, timezone
from typing import Union


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Return the local calendar date."""
    return date.today()


def parse_date(value: Union[str, date]) -> date:
    """
    Parse an ISO date (YYYY-MM-DD) into a date.

    Args:
        value: ISO date string, or a date (returned unchanged)

    Returns:
        date instance

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())
