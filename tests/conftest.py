from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from procmaster.adapters.sqlalchemy.migrations import upgrade_head
from procmaster.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBodyMasteringUnitOfWork,
    SqlAlchemyTenderMasteringUnitOfWork,
    SqlAlchemyTenderSizeUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=sqlite_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_started(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True, migrate=False)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def tender_uow_factory(
    sqlite_started: Engine,
) -> Callable[[], SqlAlchemyTenderMasteringUnitOfWork]:
    _ = sqlite_started
    return SqlAlchemyTenderMasteringUnitOfWork


@pytest.fixture
def body_uow_factory(sqlite_started: Engine) -> Callable[[], SqlAlchemyBodyMasteringUnitOfWork]:
    _ = sqlite_started
    return SqlAlchemyBodyMasteringUnitOfWork


@pytest.fixture
def size_uow_factory(sqlite_started: Engine) -> Callable[[], SqlAlchemyTenderSizeUnitOfWork]:
    _ = sqlite_started
    return SqlAlchemyTenderSizeUnitOfWork
