"""SQLAlchemy-backed units of work for mastering and tender size enrichment."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from procmaster.adapters.sqlalchemy.migrations import upgrade_head
from procmaster.adapters.sqlalchemy.repositories import (
    SqlAlchemyIndicatorRepository,
    SqlAlchemyMasterBodyRepository,
    SqlAlchemyMasterTenderRepository,
    SqlAlchemyMatchedBodyRepository,
    SqlAlchemyMatchedTenderRepository,
)
from procmaster.config import get_database_config
from procmaster.config.mastering import DEFAULT_PAGE_SIZE
from procmaster.domain.model import MasterBody, MasterTender, MatchedBody, MatchedTender
from procmaster.domain.ports import (
    MasteringRepositories,
    RepositoryCollection,
    TenderSizeRepositories,
)

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The adapter is used before ``startup()`` or a unit of work outside its ``with`` block."""


@dataclass(slots=True)
class _Binding:
    engine: Engine
    sessions: sessionmaker[Session]


_binding: _Binding | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
    migrate: bool = True,
) -> None:
    """Bind the adapter to an engine and bring its schema up to date."""

    global _binding  # noqa: PLW0603
    if _binding is not None and not force:
        raise StartupError("SQLAlchemy adapter is already bound; pass force=True to rebind.")

    bound_engine = engine or create_engine(database_uri or get_database_config().uri)
    if migrate:
        upgrade_head(engine=bound_engine)
    _binding = _Binding(
        engine=bound_engine, sessions=sessionmaker(bind=bound_engine, expire_on_commit=False)
    )
    log.info("SQLAlchemy adapter bound to %s", bound_engine.url.render_as_string())


def configured_engine() -> Engine | None:
    return None if _binding is None else _binding.engine


def is_started() -> bool:
    return _binding is not None


def shutdown() -> None:
    """Dispose the bound engine, if any, and unbind the adapter."""

    global _binding  # noqa: PLW0603
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


def _session_factory() -> sessionmaker[Session]:
    if _binding is None:
        raise StartupError(
            "SQLAlchemy adapter not initialised. Call procmaster.adapters.sqlalchemy."
            "unit_of_work.startup() before requesting a unit of work."
        )
    return _binding.sessions


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """One session per ``with`` block; leaving it without ``commit`` discards the work."""

    def __init__(self, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._sessions = _session_factory()
        self.page_size = page_size
        self._open: tuple[Session, TRepositories] | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        if self._open is not None:
            raise StartupError("Unit of work is already open")
        session = self._sessions()
        self._open = (session, self._build_repositories(session))
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._open = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def session(self) -> Session:
        return self._current()[0]

    @property
    def repositories(self) -> TRepositories:
        return self._current()[1]

    def _current(self) -> tuple[Session, TRepositories]:
        if self._open is None:
            raise StartupError("Unit of work is not open; use it as a context manager")
        return self._open



class SqlAlchemyTenderMasteringUnitOfWork(
    BaseSqlAlchemyUnitOfWork[MasteringRepositories[MatchedTender, MasterTender]]
):
    def _build_repositories(
        self, session: Session
    ) -> MasteringRepositories[MatchedTender, MasterTender]:
        return MasteringRepositories(
            matched=SqlAlchemyMatchedTenderRepository(session),
            masters=SqlAlchemyMasterTenderRepository(session, page_size=self.page_size),
            indicators=SqlAlchemyIndicatorRepository(session),
        )


class SqlAlchemyBodyMasteringUnitOfWork(
    BaseSqlAlchemyUnitOfWork[MasteringRepositories[MatchedBody, MasterBody]]
):
    def _build_repositories(self, session: Session) -> MasteringRepositories[MatchedBody, MasterBody]:
        return MasteringRepositories(
            matched=SqlAlchemyMatchedBodyRepository(session),
            masters=SqlAlchemyMasterBodyRepository(session, page_size=self.page_size),
            indicators=SqlAlchemyIndicatorRepository(session),
        )


class SqlAlchemyTenderSizeUnitOfWork(BaseSqlAlchemyUnitOfWork[TenderSizeRepositories]):
    def _build_repositories(self, session: Session) -> TenderSizeRepositories:
        return TenderSizeRepositories(
            tenders=SqlAlchemyMasterTenderRepository(session, page_size=self.page_size),
            bodies=SqlAlchemyMasterBodyRepository(session, page_size=self.page_size),
        )


if TYPE_CHECKING:
    from procmaster.domain.ports import MasteringUnitOfWork, TenderSizeUnitOfWork

    _uow_tender_check: MasteringUnitOfWork[MatchedTender, MasterTender] = (
        SqlAlchemyTenderMasteringUnitOfWork()
    )
    _uow_body_check: MasteringUnitOfWork[MatchedBody, MasterBody] = (
        SqlAlchemyBodyMasteringUnitOfWork()
    )
    _uow_size_check: TenderSizeUnitOfWork = SqlAlchemyTenderSizeUnitOfWork()
