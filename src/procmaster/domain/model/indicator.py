"""Derived indicators."""

from __future__ import annotations

from dataclasses import dataclass, field

from procmaster.domain.model.enums import IndicatorType  # noqa: TC001


@dataclass(kw_only=True)
class Indicator:
    """``(type, related_entity_id, value)``; at most one stored row per type and entity."""

    type: IndicatorType
    value: float | None = None
    related_entity_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict[str, str])
