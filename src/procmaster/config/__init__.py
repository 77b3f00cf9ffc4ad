"""Process configuration, read from the environment once at start-up."""

from __future__ import annotations

from .app import AppConfig, get_app_config
from .env import optional_positive_int
from .errors import ConfigurationError
from .logging import configure_logging
from .mastering import MasteringConfig, get_mastering_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MasteringConfig",
    "StorageConfig",
    "configure_logging",
    "get_app_config",
    "get_database_config",
    "get_mastering_config",
    "get_storage_config",
    "optional_positive_int",
]
