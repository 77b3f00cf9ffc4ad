"""Tender size enrichment.

Classifies a master tender as above or below the EU procurement thresholds and
stores the result, unless a size is already present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING

from procmaster.domain.mastering.errors import InvalidMessageError, UnsupportedOperationError
from procmaster.domain.model import BuyerType, SupplyType, TenderSize
from procmaster.domain.population import populate_bodies

if TYPE_CHECKING:
    from collections.abc import Callable

    from procmaster.domain.model import MasterTender
    from procmaster.domain.ports import Message, TenderSizeUnitOfWork

TENDER_ID_KEY = "id"

WORKS_THRESHOLD = Decimal(5_382_000)
UTILITIES_THRESHOLD = Decimal(431_000)
CENTRAL_GOVERNMENT_THRESHOLD = Decimal(140_000)
DEFAULT_THRESHOLD = Decimal(215_000)

log = logging.getLogger(__name__)


class EnrichmentOutcome(StrEnum):
    UPDATED = "updated"
    ALREADY_SET = "already_set"
    NOT_COMPUTED = "not_computed"
    NOT_FOUND = "not_found"


def _threshold(tender: MasterTender) -> Decimal | None:
    if tender.supply_type is None:
        return None
    if tender.supply_type is SupplyType.WORKS:
        return WORKS_THRESHOLD
    bodies = [ref.body for ref in tender.buyers if ref.body is not None]
    if any(body.buyer_type is BuyerType.UTILITIES for body in bodies):
        return UTILITIES_THRESHOLD
    if any(body.is_central_government for body in bodies):
        return CENTRAL_GOVERNMENT_THRESHOLD
    return DEFAULT_THRESHOLD


def calculate_tender_size(tender: MasterTender) -> TenderSize | None:
    """Size of a populated tender, or ``None`` when it cannot be determined."""

    threshold = _threshold(tender)
    if threshold is None:
        return None
    amount = None
    for price in (tender.estimated_price, tender.final_price):
        if price is not None and (amount := price.eur_amount()) is not None:
            break
    if amount is None:
        return None
    return TenderSize.ABOVE_THE_EU if amount >= threshold else TenderSize.BELOW_EU


@dataclass
class TenderSizeWorker:
    name: str
    unit_of_work_factory: Callable[[], TenderSizeUnitOfWork]
    calculate: Callable[[MasterTender], TenderSize | None] = calculate_tender_size

    def handle(self, message: Message) -> EnrichmentOutcome:
        tender_id = message.get_value(TENDER_ID_KEY)
        if not tender_id:
            raise InvalidMessageError(f"{self.name}: message carries no {TENDER_ID_KEY!r} value")
        return self.enrich(tender_id)

    def enrich(self, tender_id: str) -> EnrichmentOutcome:
        """Compute and store the size of one master tender.

        A size that is already set is never overwritten. Nothing is written unless
        a new size was computed.
        """

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            tender = repositories.tenders.get_by_id(tender_id)
            if tender is None:
                log.warning("%s: no master tender with id %s", self.name, tender_id)
                return EnrichmentOutcome.NOT_FOUND
            if tender.size is not None:
                log.debug("%s: tender %s already has size %s", self.name, tender_id, tender.size)
                return EnrichmentOutcome.ALREADY_SET

            populated = populate_bodies([tender], repositories.bodies)[0]
            size = self.calculate(populated)
            if size is None:
                log.debug("%s: size of tender %s could not be computed", self.name, tender_id)
                return EnrichmentOutcome.NOT_COMPUTED

            tender.size = size
            repositories.tenders.save(tender)
            uow.commit()
        log.info("%s: tender %s classified as %s", self.name, tender_id, size)
        return EnrichmentOutcome.UPDATED

    def resend(self, version: str, date_from: str, date_to: str) -> None:
        _ = (version, date_from, date_to)
        raise UnsupportedOperationError("Tender size worker does not support message resending.")
