"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from procmaster.adapters.sqlalchemy.codec import (
    MASTER_BODY_CODEC,
    MASTER_TENDER_CODEC,
    MATCHED_BODY_CODEC,
    MATCHED_TENDER_CODEC,
    DocumentCodec,
)
from procmaster.adapters.sqlalchemy.mappings import (
    indicator_table,
    master_body_table,
    master_tender_table,
    matched_body_table,
    matched_tender_table,
)
from procmaster.config.mastering import DEFAULT_PAGE_SIZE
from procmaster.domain.mastering.errors import DuplicateMasterError
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

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Select, Table
    from sqlalchemy.orm import Session


def _new_id() -> str:
    return str(uuid.uuid4())


class SqlAlchemyMatchedRepository[TMatched: MatchedRecord]:
    """Candidate records; written by upstream matching, read by mastering."""

    def __init__(self, session: Session, table: Table, codec: DocumentCodec[TMatched]) -> None:
        self.session = session
        self._table = table
        self._codec = codec

    def add(self, record: TMatched) -> None:
        if record.id is None:
            record.id = _new_id()
        self.session.execute(
            insert(self._table).values(
                id=record.id,
                group_id=record.group_id,
                source=record.source,
                source_id=record.source_id,
                country=record.country,
                publication_date=record.publication_date,
                modified=record.modified,
                data=self._codec.dump(record),
            )
        )

    def get_by_group_id(self, group_id: str) -> list[TMatched]:
        stmt = (
            select(self._table.c.data)
            .where(self._table.c.group_id == group_id)
            .order_by(self._table.c.publication_date, self._table.c.id)
        )
        return [self._codec.load(document) for document in self.session.scalars(stmt)]


class SqlAlchemyMasterRepository[TMaster: MasterRecord]:
    """Master records keyed by storage id, unique per group id."""

    def __init__(
        self,
        session: Session,
        table: Table,
        codec: DocumentCodec[TMaster],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.session = session
        self._table = table
        self._codec = codec
        self.page_size = page_size

    def get_by_group_id(self, group_id: str) -> list[TMaster]:
        return self._load(select(self._table.c.data).where(self._table.c.group_id == group_id))

    def get_by_group_ids(self, group_ids: Iterable[str]) -> list[TMaster]:
        wanted = list(group_ids)
        if not wanted:
            return []
        return self._load(
            select(self._table.c.data)
            .where(self._table.c.group_id.in_(wanted))
            .order_by(self._table.c.group_id)
        )

    def get_empty_instance(self) -> TMaster:
        return self._codec.record_type()

    def save(self, record: TMaster) -> str:
        """Insert a new record or replace the stored one; returns the storage id."""

        record.modified = datetime.now(UTC)
        if record.id is None:
            return self._insert(record)
        stmt = update(self._table).where(self._table.c.id == record.id).values(**self._row(record))
        self.session.execute(stmt)
        return record.id

    def _insert(self, record: TMaster) -> str:
        record.id = _new_id()
        try:
            self.session.execute(insert(self._table).values(id=record.id, **self._row(record)))
        except IntegrityError as exc:
            record.id = None
            # a concurrent run stored a master for the same group first
            if record.group_id is not None and "group_id" in str(exc.orig):
                raise DuplicateMasterError(record.group_id, 2) from exc
            raise
        return record.id

    def get_by_id(self, record_id: str) -> TMaster | None:
        document = self.session.scalar(
            select(self._table.c.data).where(self._table.c.id == record_id)
        )
        return None if document is None else self._codec.load(document)

    def get_modified_after(self, timestamp: datetime, page: int = 0) -> list[TMaster]:
        stmt = (
            select(self._table.c.data)
            .where(self._table.c.modified > timestamp)
            .order_by(self._table.c.modified, self._table.c.id)
        )
        return self._load(self._paged(stmt, page))

    def get_by_country(self, country: str, page: int = 0) -> list[TMaster]:
        stmt = (
            select(self._table.c.data)
            .where(self._table.c.country == country)
            .order_by(self._table.c.id)
        )
        return self._load(self._paged(stmt, page))

    def _paged(self, stmt: Select[tuple[str]], page: int) -> Select[tuple[str]]:
        if page < 0:
            raise ValueError(f"page must not be negative, got {page}")
        return stmt.limit(self.page_size).offset(page * self.page_size)

    def _load(self, stmt: Select[tuple[str]]) -> list[TMaster]:
        return [self._codec.load(document) for document in self.session.scalars(stmt)]

    def _row(self, record: TMaster) -> dict[str, object]:
        return {
            "group_id": record.group_id,
            "persistent_id": record.persistent_id,
            "country": record.country,
            "modified": record.modified,
            "data": self._codec.dump(record),
        }


class SqlAlchemyMatchedTenderRepository(SqlAlchemyMatchedRepository[MatchedTender]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, matched_tender_table, MATCHED_TENDER_CODEC)


class SqlAlchemyMatchedBodyRepository(SqlAlchemyMatchedRepository[MatchedBody]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, matched_body_table, MATCHED_BODY_CODEC)


class SqlAlchemyMasterTenderRepository(SqlAlchemyMasterRepository[MasterTender]):
    def __init__(self, session: Session, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(session, master_tender_table, MASTER_TENDER_CODEC, page_size=page_size)


class SqlAlchemyMasterBodyRepository(SqlAlchemyMasterRepository[MasterBody]):
    def __init__(self, session: Session, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(session, master_body_table, MASTER_BODY_CODEC, page_size=page_size)


class SqlAlchemyIndicatorRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def delete(self, entity_id: str, indicator_type: IndicatorType) -> None:
        self.session.execute(
            delete(indicator_table)
            .where(indicator_table.c.related_entity_id == entity_id)
            .where(indicator_table.c.type == indicator_type)
        )

    def save(self, indicator: Indicator) -> None:
        if indicator.related_entity_id is None:
            raise ValueError(f"Indicator {indicator.type} has no related entity id")
        self.session.execute(
            insert(indicator_table).values(
                type=indicator.type,
                related_entity_id=indicator.related_entity_id,
                value=indicator.value,
                metadata=dict(indicator.metadata),
            )
        )

    def get_by_entity_id(self, entity_id: str) -> list[Indicator]:
        stmt = (
            select(
                indicator_table.c.type,
                indicator_table.c.related_entity_id,
                indicator_table.c.value,
                indicator_table.c["metadata"],
            )
            .where(indicator_table.c.related_entity_id == entity_id)
            .order_by(indicator_table.c.type)
        )
        return [
            Indicator(
                type=IndicatorType(indicator_type),
                related_entity_id=related_entity_id,
                value=value,
                metadata=dict(extra or {}),
            )
            for indicator_type, related_entity_id, value, extra in self.session.execute(stmt)
        ]
