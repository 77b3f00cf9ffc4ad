"""Domain records for procurement mastering."""

from __future__ import annotations

from .base import MasterRecord, MatchedRecord
from .body import Address, BodyFields, BodyIdentifier, MasterBody, MatchedBody
from .enums import BuyerType, IndicatorType, RecordKind, SupplyType, TenderSize
from .indicator import Indicator
from .tender import (
    EUR,
    AwardCriterion,
    BodyRef,
    MasterLot,
    MasterTender,
    MatchedLot,
    MatchedTender,
    Price,
    Publication,
    TenderFields,
)

__all__ = [
    "EUR",
    "Address",
    "AwardCriterion",
    "BodyFields",
    "BodyIdentifier",
    "BodyRef",
    "BuyerType",
    "Indicator",
    "IndicatorType",
    "MasterBody",
    "MasterLot",
    "MasterRecord",
    "MasterTender",
    "MatchedBody",
    "MatchedLot",
    "MatchedRecord",
    "MatchedTender",
    "Price",
    "Publication",
    "RecordKind",
    "SupplyType",
    "TenderFields",
    "TenderSize",
]
