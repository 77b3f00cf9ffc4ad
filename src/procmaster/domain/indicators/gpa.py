"""Covered-by-GPA administrative indicator."""

from __future__ import annotations

from dataclasses import dataclass

from procmaster.domain.model import Indicator, IndicatorType, MasterTender


@dataclass(slots=True, frozen=True)
class CoveredByGpaIndicatorPlugin:
    """Flag tenders covered by the WTO Government Procurement Agreement.

    Positive when the tender itself or any of its lots says so. No indicator is
    produced otherwise, which removes a previously stored one.
    """

    positive_value: float = 1.0

    @property
    def indicator_type(self) -> IndicatorType:
        return IndicatorType.ADMINISTRATIVE_COVERED_BY_GPA

    def evaluate(self, master: MasterTender) -> Indicator | None:
        covered = master.is_covered_by_gpa is True or any(
            lot.is_covered_by_gpa is True for lot in master.lots
        )
        if not covered:
            return None
        return Indicator(type=self.indicator_type, value=self.positive_value)
