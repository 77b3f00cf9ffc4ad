"""Alembic environment for procmaster."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from procmaster.adapters.sqlalchemy.mappings import metadata
from procmaster.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config
url = config.get_main_option("sqlalchemy.url") or get_database_config().uri
options = {"target_metadata": metadata, "render_as_batch": True, "compare_type": True}


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **options)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    context.configure(url=url, literal_binds=True, **options)
    with context.begin_transaction():
        context.run_migrations()
elif (shared := config.attributes.get("connection")) is not None:
    _migrate(shared)
else:
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _migrate(connection)
    finally:
        engine.dispose()
