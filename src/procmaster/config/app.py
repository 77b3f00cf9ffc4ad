"""Process-wide configuration bundle."""

from __future__ import annotations

from dataclasses import dataclass, field

from .mastering import MasteringConfig, get_mastering_config
from .storage import DatabaseConfig, get_database_config


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Configuration built once at process start and handed to services explicitly."""

    database: DatabaseConfig
    mastering: MasteringConfig = field(default_factory=MasteringConfig)


def get_app_config() -> AppConfig:
    return AppConfig(database=get_database_config(), mastering=get_mastering_config())
