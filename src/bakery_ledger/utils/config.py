"""
Configuration management for the Bakery Ledger application.

This module handles:
- Environment selection (production, development, test)
- Location of the SQLite state store
- Money precision settings

Environment variables:
    BAKERY_LEDGER_ENV: production (default), development or test
    BAKERY_LEDGER_DATA_DIR: directory holding bakery_ledger.db
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .constants import (
    APP_NAME,
    APP_VERSION,
    CURRENCY_PLACES,
    DATABASE_FILENAME,
    DATABASE_VERSION,
)

logger = logging.getLogger(__name__)

ENV_VAR_ENVIRONMENT = "BAKERY_LEDGER_ENV"
ENV_VAR_DATA_DIR = "BAKERY_LEDGER_DATA_DIR"

VALID_ENVIRONMENTS = ("production", "development", "test")

# src/bakery_ledger/utils/config.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _default_data_dir(environment: str) -> Path:
    if environment == "development":
        return PROJECT_ROOT / "data"
    return Path.home() / "Documents" / "BakeryLedger"


class Config:
    """
    Settings for one environment.

    The test environment always uses an in-memory database; the others
    store bakery_ledger.db under data_dir.
    """

    app_name = APP_NAME
    app_version = APP_VERSION
    database_version = DATABASE_VERSION
    currency_places = CURRENCY_PLACES

    def __init__(
        self, environment: str = "production", data_dir: Optional[Union[str, Path]] = None
    ):
        """
        Args:
            environment: 'production', 'development' or 'test'
            data_dir: Directory for the database file. Falls back to
                BAKERY_LEDGER_DATA_DIR, then the environment default.

        Raises:
            ValueError: If environment is not recognized
        """
        if environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{environment}'. "
                f"Expected one of: {', '.join(VALID_ENVIRONMENTS)}"
            )
        self.environment = environment

        if data_dir is None:
            data_dir = os.environ.get(ENV_VAR_DATA_DIR) or _default_data_dir(environment)
        self.data_dir = Path(data_dir)

    @property
    def database_path(self) -> Path:
        return self.data_dir / DATABASE_FILENAME

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the state store."""
        if self.environment == "test":
            return "sqlite:///:memory:"
        return f"sqlite:///{self.database_path.as_posix()}"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def ensure_directories(self) -> None:
        """Create data_dir if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def database_exists(self) -> bool:
        return self.database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', data_dir='{self.data_dir}')"


_config: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Return the process-wide Config, creating it on first call.

    Args:
        environment: Environment used only when the singleton is created;
            defaults to BAKERY_LEDGER_ENV, then production. A different value
            passed later is ignored with a warning.
    """
    global _config

    if _config is None:
        _config = Config(environment or os.environ.get(ENV_VAR_ENVIRONMENT, "production"))
    elif environment is not None and environment != _config.environment:
        logger.warning(
            f"Ignoring environment='{environment}': configuration already "
            f"initialized for '{_config.environment}'"
        )

    return _config


def reset_config() -> None:
    """Forget the singleton so the next get_config() re-reads the environment."""
    global _config
    _config = None


def get_database_url() -> str:
    return get_config().database_url
