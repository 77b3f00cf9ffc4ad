from __future__ import annotations

from datetime import date

import pytest

from procmaster.config import MasteringConfig
from procmaster.domain.mastering import MasteringStatus
from procmaster.domain.mastering.body import build_body_orchestrator, finalize_body
from procmaster.domain.mastering.sources import BODY_SOURCES, get_body_source, get_tender_source
from procmaster.domain.model import Address, BodyIdentifier, BuyerType, MasterBody, RecordKind
from tests.support.fakes import body_mastering_uow
from tests.support.records import make_matched_body


def test_finalize_body_collapses_whitespace_in_name() -> None:
    item = MasterBody(name="  Gmina   Miasta\tKrakowa ")

    finalized = finalize_body(item, [make_matched_body()])

    assert finalized.name == "Gmina Miasta Krakowa"
    assert finalized.sources == ["uzp"]


def test_body_source_presets() -> None:
    assert {name: source.kind for name, source in BODY_SOURCES.items()} == {
        "uzp": RecordKind.BODY,
        "pce": RecordKind.BODY,
        "enarocanje": RecordKind.BODY,
    }
    with pytest.raises(ValueError, match="enarocanje"):
        get_body_source("uvo")


def test_body_orchestrator_rejects_tender_sources() -> None:
    with pytest.raises(ValueError, match="not bodies"):
        build_body_orchestrator(
            get_tender_source("uvo"),  # type: ignore[arg-type]
            unit_of_work_factory=body_mastering_uow,
            config=MasteringConfig(),
        )


def test_body_mastering_end_to_end() -> None:
    older = make_matched_body(
        source_id="1",
        publication_date=date(2023, 5, 1),
        hash="h-krakow",
        buyer_type=BuyerType.REGIONAL_AUTHORITY,
        body_ids=[BodyIdentifier(id="351554353", type="STATISTICAL")],
        address=Address(city="Kraków", postcode="31-004"),
    )
    newer = make_matched_body(
        source_id="2",
        publication_date=date(2024, 5, 1),
        hash="h-krakow",
        name="Gmina  Miasta Krakowa",
        buyer_type=BuyerType.REGIONAL_AUTHORITY,
        body_ids=[
            BodyIdentifier(id="6761013717", type="VAT"),
            BodyIdentifier(id="351554353", type="STATISTICAL", scope="PL"),
        ],
        email="zamowienia@um.krakow.pl",
    )
    uow = body_mastering_uow([older, newer])
    orchestrator = build_body_orchestrator(
        get_body_source("uzp"), unit_of_work_factory=lambda: uow, config=MasteringConfig()
    )

    result = orchestrator.master("body-group-1")

    assert result.status is MasteringStatus.MASTERED
    assert result.persistent_id == "PL_h-krakow"
    assert result.indicators == ()
    master = uow.repositories.masters.get_by_id(result.master_id or "")
    assert master is not None
    assert master.name == "Gmina Miasta Krakowa"
    assert master.buyer_type is BuyerType.REGIONAL_AUTHORITY
    assert [(identifier.id, identifier.scope) for identifier in master.body_ids] == [
        ("351554353", "PL"),
        ("6761013717", None),
    ]
    assert master.address == Address(city="Kraków", postcode="31-004")
    assert master.email == "zamowienia@um.krakow.pl"
    assert master.candidate_ids == ["uzp-1", "uzp-2"]
