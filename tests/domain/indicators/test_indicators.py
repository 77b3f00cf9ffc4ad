from __future__ import annotations

import pytest

from procmaster.domain.indicators import CoveredByGpaIndicatorPlugin, SingleBidIndicatorPlugin
from procmaster.domain.model import IndicatorType, MasterLot, MasterTender
from procmaster.domain.plugins import IndicatorPlugin


def test_plugins_satisfy_indicator_contract() -> None:
    assert isinstance(CoveredByGpaIndicatorPlugin(), IndicatorPlugin)
    assert isinstance(SingleBidIndicatorPlugin(), IndicatorPlugin)


@pytest.mark.parametrize(
    ("tender_flag", "lot_flags", "expected"),
    [
        (True, [], True),
        (None, [None, True], True),
        (False, [False, None], False),
        (None, [], False),
    ],
)
def test_gpa_indicator(tender_flag: bool | None, lot_flags: list[bool | None], expected: bool) -> None:
    master = MasterTender(
        is_covered_by_gpa=tender_flag,
        lots=[MasterLot(lot_number=index, is_covered_by_gpa=flag) for index, flag in enumerate(lot_flags, 1)],
    )

    indicator = CoveredByGpaIndicatorPlugin().evaluate(master)

    if expected:
        assert indicator is not None
        assert indicator.type is IndicatorType.ADMINISTRATIVE_COVERED_BY_GPA
        assert indicator.value == 1.0
        assert indicator.related_entity_id is None
    else:
        assert indicator is None


def test_single_bid_indicator_share_of_lots() -> None:
    master = MasterTender(
        lots=[
            MasterLot(lot_number=1, bids_count=1),
            MasterLot(lot_number=2, bids_count=3),
            MasterLot(lot_number=3, bids_count=None),
            MasterLot(lot_number=4, bids_count=1),
        ]
    )

    indicator = SingleBidIndicatorPlugin().evaluate(master)

    assert indicator is not None
    assert indicator.value == pytest.approx(2 / 3)
    assert indicator.metadata == {"lots": "3", "single_bid_lots": "2"}


def test_single_bid_indicator_absent_without_bid_counts() -> None:
    master = MasterTender(lots=[MasterLot(lot_number=1)])

    assert SingleBidIndicatorPlugin().evaluate(master) is None
