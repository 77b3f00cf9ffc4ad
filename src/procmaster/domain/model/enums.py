"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RecordKind(StrEnum):
    TENDER = "tender"
    BODY = "body"


class IndicatorType(StrEnum):
    """Fixed set of indicator kinds; each kind is also the replace-key in storage."""

    ADMINISTRATIVE_COVERED_BY_GPA = "ADMINISTRATIVE_COVERED_BY_GPA"
    INTEGRITY_SINGLE_BID = "INTEGRITY_SINGLE_BID"
    INTEGRITY_CALL_FOR_TENDER_PUBLICATION = "INTEGRITY_CALL_FOR_TENDER_PUBLICATION"
    TRANSPARENCY_NUMBER_OF_KEY_MISSING_FIELDS = "TRANSPARENCY_NUMBER_OF_KEY_MISSING_FIELDS"


class TenderSize(StrEnum):
    ABOVE_THE_EU = "ABOVE_THE_EU"
    BELOW_EU = "BELOW_EU"


class SupplyType(StrEnum):
    SUPPLIES = "SUPPLIES"
    SERVICES = "SERVICES"
    WORKS = "WORKS"


class BuyerType(StrEnum):
    NATIONAL_AUTHORITY = "NATIONAL_AUTHORITY"
    NATIONAL_AGENCY = "NATIONAL_AGENCY"
    REGIONAL_AUTHORITY = "REGIONAL_AUTHORITY"
    REGIONAL_AGENCY = "REGIONAL_AGENCY"
    PUBLIC_BODY = "PUBLIC_BODY"
    UTILITIES = "UTILITIES"
    EUROPEAN_AGENCY = "EUROPEAN_AGENCY"
    OTHER = "OTHER"
