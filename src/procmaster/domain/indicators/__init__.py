"""Indicator plugins evaluated on finished master tenders."""

from __future__ import annotations

from .gpa import CoveredByGpaIndicatorPlugin
from .single_bid import SingleBidIndicatorPlugin

__all__ = ["CoveredByGpaIndicatorPlugin", "SingleBidIndicatorPlugin"]
