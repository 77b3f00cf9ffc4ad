"""Ports for reading candidates and persisting master records and indicators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from procmaster.domain.model import (
    Indicator,
    IndicatorType,
    MasterBody,
    MasterRecord,
    MasterTender,
    MatchedRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime


@runtime_checkable
class MatchedRepository[TMatched: MatchedRecord](Protocol):
    """Read access to candidate records produced by upstream matching."""

    def add(self, record: TMatched) -> None: ...

    def get_by_group_id(self, group_id: str) -> list[TMatched]: ...


@runtime_checkable
class MasterRepository[TMaster: MasterRecord](Protocol):
    """Persistence contract for canonical records."""

    def get_by_group_id(self, group_id: str) -> list[TMaster]: ...

    def get_by_group_ids(self, group_ids: Iterable[str]) -> list[TMaster]: ...

    def get_empty_instance(self) -> TMaster: ...

    def save(self, record: TMaster) -> str: ...

    def get_by_id(self, record_id: str) -> TMaster | None: ...

    def get_modified_after(self, timestamp: datetime, page: int = 0) -> Sequence[TMaster]: ...

    def get_by_country(self, country: str, page: int = 0) -> Sequence[TMaster]: ...


@runtime_checkable
class MasterTenderRepository(MasterRepository[MasterTender], Protocol):
    """Repository contract for master tenders."""


@runtime_checkable
class MasterBodyRepository(MasterRepository[MasterBody], Protocol):
    """Repository contract for master bodies."""


@runtime_checkable
class IndicatorRepository(Protocol):
    """Indicators are replaced wholesale per ``(type, entity)`` on every run."""

    def delete(self, entity_id: str, indicator_type: IndicatorType) -> None: ...

    def save(self, indicator: Indicator) -> None: ...

    def get_by_entity_id(self, entity_id: str) -> list[Indicator]: ...
