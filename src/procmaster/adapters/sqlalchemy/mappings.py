"""SQLAlchemy table metadata for candidate records, master records and indicators.

Records are stored as JSON documents in ``data``; the remaining columns are the
fields the repositories filter and sort on.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)

from procmaster.domain.model import IndicatorType

ID_LENGTH = 36


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone aware datetimes, stored and returned in UTC.

    SQLite drops the offset, so naive values read back are taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is not None:
            return _as_utc(value)
        return None

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is not None:
            return _as_utc(value)
        return None


def _as_utc(value: datetime) -> datetime:
    return value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "pk": "pk_%(table_name)s",
    }
)


def _matched_table(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", String(ID_LENGTH), primary_key=True),
        Column("group_id", String, nullable=True, index=True),
        Column("source", String, nullable=True),
        Column("source_id", String, nullable=True),
        Column("country", String(2), nullable=True),
        Column("publication_date", Date, nullable=True),
        Column("modified", UTCDateTime, nullable=True),
        Column("data", Text, nullable=False),
    )


def _master_table(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("id", String(ID_LENGTH), primary_key=True),
        # one master per group at storage level as well
        Column("group_id", String, nullable=False, unique=True),
        Column("persistent_id", String, nullable=True, index=True),
        Column("country", String(2), nullable=True, index=True),
        Column("modified", UTCDateTime, nullable=False, index=True),
        Column("data", Text, nullable=False),
    )


matched_tender_table = _matched_table("matched_tender")
matched_body_table = _matched_table("matched_body")
master_tender_table = _master_table("master_tender")
master_body_table = _master_table("master_body")

indicator_table = Table(
    "indicator",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", Enum(IndicatorType, native_enum=False), nullable=False),
    Column("related_entity_id", String(ID_LENGTH), nullable=False),
    Column("value", Float, nullable=True),
    Column("metadata", JSON, nullable=False, default=dict),
    UniqueConstraint("type", "related_entity_id"),
    Index("ix_indicator_related_entity_id", "related_entity_id"),
)

