"""In-memory repositories and units of work."""

from __future__ import annotations

import copy
import itertools
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from procmaster.domain.model import (
    Indicator,
    IndicatorType,
    MasterBody,
    MasterRecord,
    MasterTender,
    MatchedBody,
    MatchedRecord,
    MatchedTender,
)
from procmaster.domain.ports import (
    MasteringRepositories,
    RepositoryCollection,
    TenderSizeRepositories,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType


class FakeMatchedRepository[TMatched: MatchedRecord]:
    def __init__(self, records: Iterable[TMatched] = ()) -> None:
        self.records: list[TMatched] = list(records)

    def add(self, record: TMatched) -> None:
        self.records.append(record)

    def get_by_group_id(self, group_id: str) -> list[TMatched]:
        return [copy.deepcopy(record) for record in self.records if record.group_id == group_id]


class FakeMasterRepository[TMaster: MasterRecord]:
    """Keeps stored copies, so callers can only change data through ``save``."""

    def __init__(self, record_type: type[TMaster], records: Iterable[TMaster] = ()) -> None:
        self._record_type = record_type
        self._ids = itertools.count(1)
        self.records: dict[str, TMaster] = {}
        self.saved: list[TMaster] = []
        for record in records:
            if record.id is None:
                record.id = self._next_id()
            self.records[record.id] = copy.deepcopy(record)

    def _next_id(self) -> str:
        return f"{self._record_type.__name__.lower()}-{next(self._ids)}"

    def get_by_group_id(self, group_id: str) -> list[TMaster]:
        return [
            copy.deepcopy(record) for record in self.records.values() if record.group_id == group_id
        ]

    def get_by_group_ids(self, group_ids: Iterable[str]) -> list[TMaster]:
        wanted = set(group_ids)
        return [
            copy.deepcopy(record) for record in self.records.values() if record.group_id in wanted
        ]

    def get_empty_instance(self) -> TMaster:
        return self._record_type()

    def save(self, record: TMaster) -> str:
        if record.id is None:
            record.id = self._next_id()
        record.modified = datetime.now(UTC)
        self.records[record.id] = copy.deepcopy(record)
        self.saved.append(copy.deepcopy(record))
        return record.id

    def get_by_id(self, record_id: str) -> TMaster | None:
        record = self.records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def get_modified_after(self, timestamp: datetime, page: int = 0) -> list[TMaster]:
        _ = page
        return [
            copy.deepcopy(record)
            for record in self.records.values()
            if record.modified is not None and record.modified > timestamp
        ]

    def get_by_country(self, country: str, page: int = 0) -> list[TMaster]:
        _ = page
        return [
            copy.deepcopy(record) for record in self.records.values() if record.country == country
        ]


class FakeIndicatorRepository:
    def __init__(self) -> None:
        self.rows: dict[tuple[str, IndicatorType], Indicator] = {}
        self.deleted: list[tuple[str, IndicatorType]] = []

    def delete(self, entity_id: str, indicator_type: IndicatorType) -> None:
        self.deleted.append((entity_id, indicator_type))
        self.rows.pop((entity_id, indicator_type), None)

    def save(self, indicator: Indicator) -> None:
        assert indicator.related_entity_id is not None
        key = (indicator.related_entity_id, indicator.type)
        assert key not in self.rows, f"indicator {key} saved twice"
        self.rows[key] = copy.deepcopy(indicator)

    def get_by_entity_id(self, entity_id: str) -> list[Indicator]:
        return [
            copy.deepcopy(indicator)
            for (related_id, _type), indicator in self.rows.items()
            if related_id == entity_id
        ]


class FakeUnitOfWork[TRepositories: RepositoryCollection]:
    """Counts commits and rollbacks; repositories are shared across ``with`` blocks."""

    def __init__(self, repositories: TRepositories) -> None:
        self._repositories = repositories
        self.entered = 0
        self.commits = 0
        self.rollbacks = 0

    @property
    def repositories(self) -> TRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork[TRepositories]:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


type TenderMasteringUnitOfWork = FakeUnitOfWork[MasteringRepositories[MatchedTender, MasterTender]]
type BodyMasteringUnitOfWork = FakeUnitOfWork[MasteringRepositories[MatchedBody, MasterBody]]


def tender_mastering_uow(
    matched: Iterable[MatchedTender] = (), masters: Iterable[MasterTender] = ()
) -> TenderMasteringUnitOfWork:
    return FakeUnitOfWork(
        MasteringRepositories(
            matched=FakeMatchedRepository(matched),
            masters=FakeMasterRepository(MasterTender, masters),
            indicators=FakeIndicatorRepository(),
        )
    )


def body_mastering_uow(
    matched: Iterable[MatchedBody] = (), masters: Iterable[MasterBody] = ()
) -> BodyMasteringUnitOfWork:
    return FakeUnitOfWork(
        MasteringRepositories(
            matched=FakeMatchedRepository(matched),
            masters=FakeMasterRepository(MasterBody, masters),
            indicators=FakeIndicatorRepository(),
        )
    )


def tender_size_uow(
    tenders: Iterable[MasterTender] = (), bodies: Iterable[MasterBody] = ()
) -> FakeUnitOfWork[TenderSizeRepositories]:
    return FakeUnitOfWork(
        TenderSizeRepositories(
            tenders=FakeMasterRepository(MasterTender, tenders),
            bodies=FakeMasterRepository(MasterBody, bodies),
        )
    )
