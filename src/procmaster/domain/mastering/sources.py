"""Per-source mastering configuration.

Sources differ only in small hooks (candidate filtering, post-processing, extra
merge plugins); everything else is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from procmaster.domain.mastering.orchestrator import (
    CandidateFilter,
    PostProcessHook,
    keep_all,
    unchanged,
)
from procmaster.domain.model import (
    MasterBody,
    MasterRecord,
    MasterTender,
    MatchedBody,
    MatchedRecord,
    MatchedTender,
    RecordKind,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from procmaster.domain.model import Price
    from procmaster.domain.plugins import MergePlugin


@dataclass(frozen=True)
class MasteringSource[TMatched: MatchedRecord, TMaster: MasterRecord]:
    name: str
    kind: RecordKind
    national_currency: str | None = None
    preprocess: CandidateFilter[TMatched] = keep_all
    postprocess: PostProcessHook[TMaster] = unchanged
    plugins: tuple[tuple[str, MergePlugin[TMatched, TMaster]], ...] = ()


def _tender_prices(item: MasterTender) -> Iterator[Price]:
    for price in (item.estimated_price, item.final_price):
        if price is not None:
            yield price
    for lot in item.lots:
        for price in (lot.estimated_price, lot.final_price):
            if price is not None:
                yield price


def fill_missing_currency(currency: str) -> Callable[[MasterTender], MasterTender]:
    """Post-process hook stamping the national currency on amounts published without one."""

    def fill(item: MasterTender) -> MasterTender:
        for price in _tender_prices(item):
            if price.net_amount is not None and price.currency is None:
                price.currency = currency
        return item

    return fill


def tender_source(
    name: str, national_currency: str
) -> MasteringSource[MatchedTender, MasterTender]:
    return MasteringSource[MatchedTender, MasterTender](
        name=name,
        kind=RecordKind.TENDER,
        national_currency=national_currency,
        postprocess=fill_missing_currency(national_currency),
    )


def body_source(name: str) -> MasteringSource[MatchedBody, MasterBody]:
    return MasteringSource[MatchedBody, MasterBody](name=name, kind=RecordKind.BODY)


TENDER_SOURCES: dict[str, MasteringSource[MatchedTender, MasterTender]] = {
    source.name: source
    for source in (
        tender_source("uvo", "EUR"),
        tender_source("boamp", "EUR"),
    )
}

BODY_SOURCES: dict[str, MasteringSource[MatchedBody, MasterBody]] = {
    source.name: source
    for source in (
        body_source("uzp"),
        body_source("pce"),
        body_source("enarocanje"),
    )
}


def get_tender_source(name: str) -> MasteringSource[MatchedTender, MasterTender]:
    source = TENDER_SOURCES.get(name)
    if source is None:
        raise ValueError(f"Unknown tender source {name!r}. Available: {sorted(TENDER_SOURCES)}")
    return source


def get_body_source(name: str) -> MasteringSource[MatchedBody, MasterBody]:
    source = BODY_SOURCES.get(name)
    if source is None:
        raise ValueError(f"Unknown body source {name!r}. Available: {sorted(BODY_SOURCES)}")
    return source
