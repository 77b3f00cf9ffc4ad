"""Tender mastering against SQLite, following one group through upstream regrouping."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import delete

from procmaster.adapters.sqlalchemy.mappings import matched_tender_table
from procmaster.config import MasteringConfig
from procmaster.domain.enrichment.tender_size import EnrichmentOutcome, TenderSizeWorker
from procmaster.domain.mastering import MasteringStatus
from procmaster.domain.mastering.sources import get_tender_source
from procmaster.domain.mastering.tender import build_tender_orchestrator
from procmaster.domain.model import BodyRef, BuyerType, IndicatorType, SupplyType, TenderSize
from tests.support.records import make_lot, make_master_body, make_matched_tender, make_price

if TYPE_CHECKING:
    from collections.abc import Callable

    from procmaster.adapters.sqlalchemy.unit_of_work import (
        SqlAlchemyTenderMasteringUnitOfWork,
        SqlAlchemyTenderSizeUnitOfWork,
    )


def _seed(
    uow_factory: Callable[[], SqlAlchemyTenderMasteringUnitOfWork],
) -> None:
    with uow_factory() as uow:
        uow.repositories.matched.add(
            make_matched_tender(
                source_id="cn-1",
                publication_date=date(2024, 1, 10),
                supply_type=SupplyType.SERVICES,
                estimated_price=make_price(180_000),
                buyers=[BodyRef(group_id="ministry")],
                lots=[make_lot(1, is_covered_by_gpa=True)],
            )
        )
        uow.repositories.matched.add(
            make_matched_tender(
                source_id="can-1",
                publication_date=date(2024, 5, 2),
                lots=[make_lot(1, bids_count=2)],
            )
        )
        uow.commit()


def test_gpa_indicator_follows_candidate_set(
    tender_uow_factory: Callable[[], SqlAlchemyTenderMasteringUnitOfWork],
) -> None:
    _seed(tender_uow_factory)
    orchestrator = build_tender_orchestrator(
        get_tender_source("uvo"), unit_of_work_factory=tender_uow_factory, config=MasteringConfig()
    )

    first = orchestrator.master("tender-group-1")

    assert first.status is MasteringStatus.MASTERED
    master_id = first.master_id or ""
    with tender_uow_factory() as uow:
        indicators = uow.repositories.indicators.get_by_entity_id(master_id)
        masters = uow.repositories.masters.get_by_group_id("tender-group-1")
    assert [indicator.type for indicator in indicators] == [
        IndicatorType.ADMINISTRATIVE_COVERED_BY_GPA,
        IndicatorType.INTEGRITY_SINGLE_BID,
    ]
    assert len(masters) == 1
    assert masters[0].lots[0].is_covered_by_gpa is True
    assert masters[0].estimated_price == make_price(180_000)

    # upstream regrouping moves the flagged notice to another group
    with tender_uow_factory() as uow:
        uow.session.execute(
            delete(matched_tender_table).where(matched_tender_table.c.source_id == "cn-1")
        )
        uow.commit()

    second = orchestrator.master("tender-group-1")

    assert second.master_id == master_id
    assert second.persistent_id != first.persistent_id
    with tender_uow_factory() as uow:
        indicators = uow.repositories.indicators.get_by_entity_id(master_id)
        masters = uow.repositories.masters.get_by_group_id("tender-group-1")
    assert [indicator.type for indicator in indicators] == [IndicatorType.INTEGRITY_SINGLE_BID]
    assert len(masters) == 1
    assert masters[0].lots[0].is_covered_by_gpa is None
    assert masters[0].estimated_price is None
    assert masters[0].candidate_ids == ["uvo-can-1"]


def test_rerun_and_size_enrichment_are_stable(
    tender_uow_factory: Callable[[], SqlAlchemyTenderMasteringUnitOfWork],
    size_uow_factory: Callable[[], SqlAlchemyTenderSizeUnitOfWork],
) -> None:
    _seed(tender_uow_factory)
    with size_uow_factory() as uow:
        uow.repositories.bodies.save(
            make_master_body(group_id="ministry", buyer_type=BuyerType.NATIONAL_AUTHORITY)
        )
        uow.commit()
    orchestrator = build_tender_orchestrator(
        get_tender_source("uvo"), unit_of_work_factory=tender_uow_factory, config=MasteringConfig()
    )
    worker = TenderSizeWorker(name="size", unit_of_work_factory=size_uow_factory)

    first = orchestrator.master("tender-group-1")
    master_id = first.master_id or ""
    assert worker.enrich(master_id) is EnrichmentOutcome.UPDATED
    assert worker.enrich(master_id) is EnrichmentOutcome.ALREADY_SET
    second = orchestrator.master("tender-group-1")

    assert second.master_id == master_id
    assert second.persistent_id == first.persistent_id
    with size_uow_factory() as uow:
        stored = uow.repositories.tenders.get_by_id(master_id)
    assert stored is not None
    assert stored.size is TenderSize.ABOVE_THE_EU
    assert stored.buyers == [BodyRef(group_id="ministry")]
