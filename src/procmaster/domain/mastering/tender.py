"""Tender mastering: lot and publication merging, finishing hook and wiring."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from operator import attrgetter
from typing import TYPE_CHECKING

from procmaster.domain.indicators import CoveredByGpaIndicatorPlugin, SingleBidIndicatorPlugin
from procmaster.domain.mastering.merge import (
    LatestListPlugin,
    LatestValuePlugin,
    ModeValuePlugin,
    UnionPlugin,
    by_recency,
    drop_duplicate_sources,
    latest,
    most_frequent,
    record_lineage,
)
from procmaster.domain.mastering.orchestrator import MasteringOrchestrator
from procmaster.domain.mastering.persistent_id import tender_persistent_id
from procmaster.domain.model import MasterLot, MasterTender, MatchedLot, MatchedTender, Price
from procmaster.domain.plugins import IndicatorPlugin, MergePlugin, PluginRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from procmaster.config.mastering import MasteringConfig
    from procmaster.domain.mastering.sources import MasteringSource
    from procmaster.domain.ports import MasteringUnitOfWork

type TenderMergeRegistry = PluginRegistry[MergePlugin[MatchedTender, MasterTender]]
type TenderIndicatorRegistry = PluginRegistry[IndicatorPlugin[MasterTender]]


@dataclass(slots=True, frozen=True)
class LotPlugin:
    """Replace the master lots with lots merged across candidates by lot number."""

    def merge(
        self,
        candidates: Sequence[MatchedTender],
        accumulator: MasterTender,
        raw_candidates: Sequence[MatchedTender],
    ) -> MasterTender:
        _ = raw_candidates
        grouped: dict[int, list[MatchedLot]] = {}
        for candidate in by_recency(candidates):
            for index, lot in enumerate(candidate.lots, start=1):
                number = lot.lot_number if lot.lot_number is not None else index
                grouped.setdefault(number, []).append(lot)
        accumulator.lots = [_merge_lot(number, lots) for number, lots in grouped.items()]
        return accumulator


def _merge_lot(number: int, lots: list[MatchedLot]) -> MasterLot:
    gpa_flags = [lot.is_covered_by_gpa for lot in lots if lot.is_covered_by_gpa is not None]
    return MasterLot(
        lot_number=number,
        title=most_frequent([lot.title for lot in lots if lot.title]),
        # one source saying covered is enough
        is_covered_by_gpa=True if any(gpa_flags) else latest(gpa_flags),
        bids_count=latest([lot.bids_count for lot in lots]),
        estimated_price=copy.deepcopy(latest([lot.estimated_price for lot in lots])),
        final_price=copy.deepcopy(latest([lot.final_price for lot in lots])),
    )


@dataclass(slots=True, frozen=True)
class PublicationPlugin:
    """Union of all candidate publications keyed by source identity, oldest first."""

    def merge(
        self,
        candidates: Sequence[MatchedTender],
        accumulator: MasterTender,
        raw_candidates: Sequence[MatchedTender],
    ) -> MasterTender:
        accumulator = UnionPlugin("publications", key=attrgetter("key")).merge(
            candidates, accumulator, raw_candidates
        )
        accumulator.publications.sort(
            key=lambda publication: publication.publication_date or date.max
        )
        return accumulator


def sum_prices(prices: Sequence[Price | None]) -> Price | None:
    """Sum prices sharing one currency; ``None`` if any amount or currency is missing."""

    if not prices or any(price is None or price.net_amount is None for price in prices):
        return None
    known = [price for price in prices if price is not None]
    currencies = {price.currency for price in known}
    if len(currencies) != 1 or None in currencies:
        return None
    eur_amounts = [price.net_amount_eur for price in known]
    return Price(
        net_amount=sum((price.net_amount or Decimal(0) for price in known), Decimal(0)),
        currency=known[0].currency,
        net_amount_eur=(
            sum((amount for amount in eur_amounts if amount is not None), Decimal(0))
            if all(amount is not None for amount in eur_amounts)
            else None
        ),
    )


def finalize_tender(item: MasterTender, raw_candidates: Sequence[MatchedTender]) -> MasterTender:
    """Source independent finishing touches applied after every merge."""

    item.lots.sort(key=lambda lot: lot.lot_number if lot.lot_number is not None else sys.maxsize)
    for position, lot in enumerate(item.lots, start=1):
        lot.position = position
    if item.final_price is None:
        item.final_price = sum_prices([lot.final_price for lot in item.lots])
    return record_lineage(item, raw_candidates)


def register_common_tender_plugins(registry: TenderMergeRegistry) -> TenderMergeRegistry:
    """Register the merge plugins every tender source runs, in execution order."""

    return (
        registry.register("title", ModeValuePlugin("title"))
        .register("country", ModeValuePlugin("country"))
        .register("procedure_type", ModeValuePlugin("procedure_type"))
        .register("supply_type", ModeValuePlugin("supply_type"))
        .register("buyers", UnionPlugin("buyers", key=attrgetter("group_id")))
        .register("estimated_price", LatestValuePlugin("estimated_price"))
        .register("final_price", LatestValuePlugin("final_price"))
        .register("is_covered_by_gpa", LatestValuePlugin("is_covered_by_gpa"))
        .register("bid_deadline", LatestValuePlugin("bid_deadline"))
        .register("award_criteria", LatestListPlugin("award_criteria"))
        .register("lots", LotPlugin())
        .register("publications", PublicationPlugin())
    )


def register_tender_indicator_plugins(
    registry: TenderIndicatorRegistry,
) -> TenderIndicatorRegistry:
    return registry.register("covered_by_gpa", CoveredByGpaIndicatorPlugin()).register(
        "single_bid", SingleBidIndicatorPlugin()
    )


def build_tender_orchestrator(
    source: MasteringSource[MatchedTender, MasterTender],
    *,
    unit_of_work_factory: Callable[[], MasteringUnitOfWork[MatchedTender, MasterTender]],
    config: MasteringConfig,
) -> MasteringOrchestrator[MatchedTender, MasterTender]:
    """Common plugins first, then the source's own, then indicators."""

    if source.kind is not MasterTender.KIND:
        raise ValueError(f"Source {source.name!r} masters {source.kind} records, not tenders")
    merge_plugins = register_common_tender_plugins(PluginRegistry("tender merge"))
    for name, plugin in source.plugins:
        merge_plugins.register(name, plugin)
    indicator_plugins = register_tender_indicator_plugins(PluginRegistry("tender indicator"))

    return MasteringOrchestrator[MatchedTender, MasterTender](
        name=f"{source.name}_tender_master",
        unit_of_work_factory=unit_of_work_factory,
        persistent_id=tender_persistent_id,
        merge_plugins=merge_plugins,
        indicator_plugins=indicator_plugins,
        general_preprocess=drop_duplicate_sources,
        source_preprocess=source.preprocess,
        post_merge=finalize_tender,
        source_postprocess=source.postprocess,
        config=config,
    )
