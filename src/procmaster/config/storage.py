"""Where the mastering database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "procmaster"
DEFAULT_DB_FILENAME: Final[str] = "procmaster.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local data directory used when no database URI is configured."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def database_path(self, *, create_dir: bool = True) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if create_dir:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.database_filename

    def sqlite_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """``PROCMASTER_DATA_DIR``, else the per-user platform data directory."""

    configured = os.getenv("PROCMASTER_DATA_DIR")
    data_dir = Path(configured) if configured else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` if set, otherwise a SQLite file in the data directory."""

    uri = os.getenv("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).sqlite_uri())
