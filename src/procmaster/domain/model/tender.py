"""Tenders, their lots and the value objects they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime  # noqa: TC003
from decimal import Decimal
from typing import ClassVar

from procmaster.domain.model.base import MasterRecord, MatchedRecord
from procmaster.domain.model.body import MasterBody
from procmaster.domain.model.enums import RecordKind, SupplyType, TenderSize

EUR = "EUR"


@dataclass(kw_only=True)
class Price:
    net_amount: Decimal | None = None
    currency: str | None = None
    net_amount_eur: Decimal | None = None

    def eur_amount(self) -> Decimal | None:
        """Return the net amount in EUR, if it is known."""
        if self.net_amount_eur is not None:
            return self.net_amount_eur
        if self.currency == EUR:
            return self.net_amount
        return None


@dataclass(kw_only=True)
class Publication:
    source: str | None = None
    source_id: str | None = None
    url: str | None = None
    publication_date: date | None = None
    form_type: str | None = None

    @property
    def key(self) -> tuple[str | None, str | None]:
        return (self.source, self.source_id)


@dataclass(kw_only=True)
class AwardCriterion:
    name: str
    weight: int | None = None
    is_price_related: bool | None = None


@dataclass(kw_only=True)
class BodyRef:
    """Reference to a master body by its group id.

    ``body`` is only filled in by body population and is never persisted.
    """

    group_id: str
    role: str | None = None
    body: MasterBody | None = field(default=None, compare=False, repr=False)


@dataclass(kw_only=True)
class MatchedLot:
    lot_number: int | None = None
    title: str | None = None
    is_covered_by_gpa: bool | None = None
    bids_count: int | None = None
    estimated_price: Price | None = None
    final_price: Price | None = None


@dataclass(kw_only=True)
class MasterLot(MatchedLot):
    position: int | None = None


@dataclass(kw_only=True)
class TenderFields:
    title: str | None = None
    procedure_type: str | None = None
    supply_type: SupplyType | None = None
    buyers: list[BodyRef] = field(default_factory=list[BodyRef])
    estimated_price: Price | None = None
    final_price: Price | None = None
    is_covered_by_gpa: bool | None = None
    award_criteria: list[AwardCriterion] = field(default_factory=list[AwardCriterion])
    bid_deadline: datetime | None = None
    publications: list[Publication] = field(default_factory=list[Publication])


@dataclass(kw_only=True)
class MatchedTender(TenderFields, MatchedRecord):
    lots: list[MatchedLot] = field(default_factory=list[MatchedLot])

    KIND: ClassVar[RecordKind] = RecordKind.TENDER


@dataclass(kw_only=True)
class MasterTender(TenderFields, MasterRecord):
    lots: list[MasterLot] = field(default_factory=list[MasterLot])
    size: TenderSize | None = None

    KIND: ClassVar[RecordKind] = RecordKind.TENDER
