"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from procmaster.domain.model import MasterRecord, MatchedRecord

if TYPE_CHECKING:
    from types import TracebackType

    from procmaster.domain.ports.persistence import (
        IndicatorRepository,
        MasterBodyRepository,
        MasterRepository,
        MasterTenderRepository,
        MatchedRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic transaction boundary around a repository collection.

    Leaving the ``with`` block through an exception rolls back; nothing is committed
    unless ``commit`` is called explicitly.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass
class MasteringRepositories[TMatched: MatchedRecord, TMaster: MasterRecord](
    RepositoryCollection
):
    """Repositories a mastering run reads from and writes to."""

    matched: MatchedRepository[TMatched]
    masters: MasterRepository[TMaster]
    indicators: IndicatorRepository


@dataclass(slots=True)
class TenderSizeRepositories(RepositoryCollection):
    """Repositories required to enrich master tenders with their size."""

    tenders: MasterTenderRepository
    bodies: MasterBodyRepository


type MasteringUnitOfWork[TMatched: MatchedRecord, TMaster: MasterRecord] = UnitOfWork[
    MasteringRepositories[TMatched, TMaster]
]
type TenderSizeUnitOfWork = UnitOfWork[TenderSizeRepositories]
