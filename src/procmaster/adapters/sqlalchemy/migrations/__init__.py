"""Alembic migrations shipped with the SQLAlchemy adapter.

The scripts live next to this module. A source checkout may point
``[tool.alembic]`` in ``pyproject.toml`` elsewhere; installed packages always
use the bundled scripts.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from alembic import command
from alembic.config import Config

from procmaster.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SCRIPTS_DIR: Final[Path] = Path(__file__).resolve().parent
# src/procmaster/adapters/sqlalchemy/migrations -> checkout root
CHECKOUT_ROOT: Final[Path] = SCRIPTS_DIR.parents[4]

log = logging.getLogger(__name__)


def _checkout_options() -> dict[str, Any]:
    pyproject = CHECKOUT_ROOT / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    with pyproject.open("rb") as handle:
        return dict(tomllib.load(handle).get("tool", {}).get("alembic", {}))


def alembic_config() -> Config:
    """Alembic ``Config`` for the bundled scripts, without an ini file."""

    options = _checkout_options()
    location = Path(str(options.pop("script_location", SCRIPTS_DIR)))
    if not location.is_absolute():
        location = CHECKOUT_ROOT / location

    config = Config()
    config.set_main_option("script_location", str(location))
    for key, value in options.items():
        config.set_main_option(str(key), str(value))
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Upgrade the database schema to the latest revision."""

    config = alembic_config()
    if engine is not None:
        # reuse the caller's connection so in-memory databases see the schema
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")
        return
    config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
    log.info("Upgrading database schema to head")
    command.upgrade(config, "head")
