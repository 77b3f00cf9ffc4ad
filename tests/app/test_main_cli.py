from __future__ import annotations

import pytest

from procmaster import main as main_module
from procmaster.app import EnrichmentRun
from procmaster.domain.mastering import MasteringResult, MasteringStatus, UnrecoverableError


def test_main_cli_masters_tender_groups(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_master(group_ids: list[str], **kwargs: object) -> list[MasteringResult]:
        captured["group_ids"] = group_ids
        captured.update(kwargs)
        return [MasteringResult(group_id=group_id) for group_id in group_ids]

    monkeypatch.setattr(main_module, "master_tender_groups", fake_master)

    main_module.main(["master-tenders", "--source", "uvo", "g1", "g2"])

    assert captured["group_ids"] == ["g1", "g2"]
    assert captured["source"] == "uvo"


def test_main_cli_exits_with_one_when_a_group_failed(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_master(group_ids: list[str], **_: object) -> list[MasteringResult]:
        return [MasteringResult.failed(group_ids[0], UnrecoverableError("boom"))]

    monkeypatch.setattr(main_module, "master_body_groups", fake_master)

    with pytest.raises(SystemExit) as exc:
        main_module.main(["master-bodies", "--source", "uzp", "b1"])

    assert exc.value.code == 1


def test_main_cli_tender_size(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[str] = []

    def fake_enrich(tender_ids: list[str], **_: object) -> list[EnrichmentRun]:
        captured.extend(tender_ids)
        return [EnrichmentRun(tender_id=tender_id) for tender_id in tender_ids]

    monkeypatch.setattr(main_module, "enrich_tender_sizes", fake_enrich)

    main_module.main(["tender-size", "t1"])

    assert captured == ["t1"]


def test_main_cli_rejects_unknown_source() -> None:
    with pytest.raises(SystemExit) as exc:
        main_module.main(["master-tenders", "--source", "ted", "g1"])

    assert exc.value.code == 2


def test_main_cli_reports_configuration_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROCMASTER_PAGE_SIZE", "zero")

    with pytest.raises(SystemExit) as exc:
        main_module.main(["tender-size", "t1"])

    assert exc.value.code == 2


def test_main_cli_unexpected_errors_exit_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_master(group_ids: list[str], **_: object) -> list[MasteringResult]:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(main_module, "master_tender_groups", fake_master)

    with pytest.raises(SystemExit) as exc:
        main_module.main(["master-tenders", "--source", "boamp", "g1"])

    assert exc.value.code == 1


def test_mastering_result_status_defaults() -> None:
    assert MasteringResult(group_id="g").status is MasteringStatus.MASTERED
