"""Single-bid integrity indicator."""

from __future__ import annotations

from dataclasses import dataclass

from procmaster.domain.model import Indicator, IndicatorType, MasterTender


@dataclass(slots=True, frozen=True)
class SingleBidIndicatorPlugin:
    """Share of lots with a known bids count that received exactly one bid."""

    @property
    def indicator_type(self) -> IndicatorType:
        return IndicatorType.INTEGRITY_SINGLE_BID

    def evaluate(self, master: MasterTender) -> Indicator | None:
        counts = [lot.bids_count for lot in master.lots if lot.bids_count is not None]
        if not counts:
            return None
        single = sum(1 for count in counts if count == 1)
        return Indicator(
            type=self.indicator_type,
            value=single / len(counts),
            metadata={"lots": str(len(counts)), "single_bid_lots": str(single)},
        )
