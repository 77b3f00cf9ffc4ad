"""Organisational bodies (buyers, bidders)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from procmaster.domain.model.base import MasterRecord, MatchedRecord
from procmaster.domain.model.enums import BuyerType, RecordKind


@dataclass(kw_only=True)
class BodyIdentifier:
    id: str
    type: str | None = None
    scope: str | None = None

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.id, self.type)


@dataclass(kw_only=True)
class Address:
    street: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = None
    nuts: list[str] = field(default_factory=list[str])


@dataclass(kw_only=True)
class BodyFields:
    name: str | None = None
    body_ids: list[BodyIdentifier] = field(default_factory=list[BodyIdentifier])
    address: Address | None = None
    buyer_type: BuyerType | None = None
    email: str | None = None
    main_activities: list[str] = field(default_factory=list[str])


@dataclass(kw_only=True)
class MatchedBody(BodyFields, MatchedRecord):
    # standardized matching hash computed upstream
    hash: str | None = None

    KIND: ClassVar[RecordKind] = RecordKind.BODY


@dataclass(kw_only=True)
class MasterBody(BodyFields, MasterRecord):
    KIND: ClassVar[RecordKind] = RecordKind.BODY

    @property
    def is_central_government(self) -> bool:
        return self.buyer_type in {BuyerType.NATIONAL_AUTHORITY, BuyerType.NATIONAL_AGENCY}
