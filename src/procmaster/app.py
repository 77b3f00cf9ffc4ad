"""Application entry points wiring configuration, adapters and workers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from procmaster.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBodyMasteringUnitOfWork,
    SqlAlchemyTenderMasteringUnitOfWork,
    SqlAlchemyTenderSizeUnitOfWork,
    is_started,
    startup,
)
from procmaster.domain.enrichment.tender_size import EnrichmentOutcome, TenderSizeWorker
from procmaster.domain.mastering import MasteringResult, UnrecoverableError
from procmaster.domain.mastering.body import build_body_orchestrator
from procmaster.domain.mastering.sources import get_body_source, get_tender_source
from procmaster.domain.mastering.tender import build_tender_orchestrator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from procmaster.config import AppConfig
    from procmaster.domain.model import MasterBody, MasterTender, MatchedBody, MatchedTender
    from procmaster.domain.ports import MasteringUnitOfWork, TenderSizeUnitOfWork

type TenderUnitOfWorkFactory = Callable[[], MasteringUnitOfWork[MatchedTender, MasterTender]]
type BodyUnitOfWorkFactory = Callable[[], MasteringUnitOfWork[MatchedBody, MasterBody]]
type TenderSizeUnitOfWorkFactory = Callable[[], TenderSizeUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True)
class EnrichmentRun:
    tender_id: str
    outcome: EnrichmentOutcome | None = None
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def _ensure_started(config: AppConfig) -> None:
    if not is_started():
        startup(database_uri=config.database.uri)


def _master_all(run: Callable[[str], MasteringResult], group_ids: Iterable[str]) -> list[MasteringResult]:
    results: list[MasteringResult] = []
    for group_id in group_ids:
        try:
            results.append(run(group_id))
        except UnrecoverableError as exc:
            log.exception("Mastering of group id %s failed", group_id)
            results.append(MasteringResult.failed(group_id, exc))
    return results


def master_tender_groups(
    group_ids: Iterable[str],
    *,
    source: str,
    config: AppConfig,
    unit_of_work_factory: TenderUnitOfWorkFactory | None = None,
) -> list[MasteringResult]:
    """Master each tender group id with the named source's configuration."""

    tender_source = get_tender_source(source)
    if unit_of_work_factory is None:
        _ensure_started(config)
        unit_of_work_factory = partial(
            SqlAlchemyTenderMasteringUnitOfWork, page_size=config.mastering.page_size
        )
    orchestrator = build_tender_orchestrator(
        tender_source, unit_of_work_factory=unit_of_work_factory, config=config.mastering
    )
    results = _master_all(orchestrator.master, group_ids)
    log.info(
        "Finished tender mastering for %s: groups=%s, failed=%s",
        source,
        len(results),
        sum(1 for result in results if not result.succeeded),
    )
    return results


def master_body_groups(
    group_ids: Iterable[str],
    *,
    source: str,
    config: AppConfig,
    unit_of_work_factory: BodyUnitOfWorkFactory | None = None,
) -> list[MasteringResult]:
    """Master each body group id with the named source's configuration."""

    body_source = get_body_source(source)
    if unit_of_work_factory is None:
        _ensure_started(config)
        unit_of_work_factory = partial(
            SqlAlchemyBodyMasteringUnitOfWork, page_size=config.mastering.page_size
        )
    orchestrator = build_body_orchestrator(
        body_source, unit_of_work_factory=unit_of_work_factory, config=config.mastering
    )
    results = _master_all(orchestrator.master, group_ids)
    log.info(
        "Finished body mastering for %s: groups=%s, failed=%s",
        source,
        len(results),
        sum(1 for result in results if not result.succeeded),
    )
    return results


def enrich_tender_sizes(
    tender_ids: Iterable[str],
    *,
    config: AppConfig,
    unit_of_work_factory: TenderSizeUnitOfWorkFactory | None = None,
) -> list[EnrichmentRun]:
    """Compute and store the size of each master tender that has none yet."""

    if unit_of_work_factory is None:
        _ensure_started(config)
        unit_of_work_factory = partial(
            SqlAlchemyTenderSizeUnitOfWork, page_size=config.mastering.page_size
        )
    worker = TenderSizeWorker(name="tender_size", unit_of_work_factory=unit_of_work_factory)

    runs: list[EnrichmentRun] = []
    for tender_id in tender_ids:
        try:
            runs.append(EnrichmentRun(tender_id=tender_id, outcome=worker.enrich(tender_id)))
        except UnrecoverableError as exc:
            log.exception("Size enrichment of tender %s failed", tender_id)
            runs.append(EnrichmentRun(tender_id=tender_id, error=exc))
    return runs
