"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across the ingredient, recipe and
order services.

Usage:
    from bakery_ledger.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="set_order_status",
        outcome="stock_deducted",
        order_id="o1",
        deductions={"1": "1100"},
    )
"""

import logging
from typing import Any


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger under the 'bakery_ledger.services' prefix.

    Example:
        >>> logger = get_service_logger("bakery_ledger.services.order_service")
        >>> logger.name
        'bakery_ledger.services.order_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"bakery_ledger.services.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The message is "<operation>: <outcome>"; context fields travel in the
    record's 'extra' so handlers can format them.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "set_stock_level")
        outcome: Outcome description (e.g., "success", "cost_recalculated")
        level: Log level (default: INFO)
        **context: Additional context fields (entity IDs, amounts, errors)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
