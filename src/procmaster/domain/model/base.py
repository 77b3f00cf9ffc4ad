"""
Base building blocks:
candidate (matched) records and canonical (master) records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime  # noqa: TC003
from typing import ClassVar

from procmaster.domain.model.enums import RecordKind  # noqa: TC001


@dataclass(kw_only=True)
class MatchedRecord:
    """One source's parsed view of an entity, linked to others through ``group_id``.

    The mastering core only ever reads these.
    """

    id: str | None = None
    group_id: str | None = None
    source: str | None = None
    source_id: str | None = None
    country: str | None = None
    publication_date: date | None = None
    modified: datetime | None = None

    KIND: ClassVar[RecordKind]

    @property
    def source_key(self) -> tuple[str | None, str | None]:
        return (self.source, self.source_id)


@dataclass(kw_only=True)
class MasterRecord:
    """Canonical record, one per ``group_id``; ``id`` stays ``None`` until first saved."""

    id: str | None = None
    group_id: str | None = None
    persistent_id: str | None = None
    country: str | None = None
    modified: datetime | None = None
    sources: list[str] = field(default_factory=list[str])
    candidate_ids: list[str] = field(default_factory=list[str])

    KIND: ClassVar[RecordKind]
