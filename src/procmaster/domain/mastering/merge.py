"""Generic merge plugins and candidate filters shared by tender and body mastering."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from procmaster.domain.model import MasterRecord, MatchedRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sequence


def by_recency[TMatched: MatchedRecord](candidates: Sequence[TMatched]) -> list[TMatched]:
    """Return candidates oldest first; undated ones count as oldest, list order breaks ties."""

    return sorted(candidates, key=lambda candidate: candidate.publication_date or date.min)


def most_frequent[TValue](values: Sequence[TValue]) -> TValue | None:
    """Most common value of ``values`` (oldest first); the newest value wins a tie."""

    counts: dict[TValue, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    best: TValue | None = None
    best_count = 0
    for value in values:
        if counts[value] >= best_count:
            best, best_count = value, counts[value]
    return best


def latest[TValue](values: Sequence[TValue | None]) -> TValue | None:
    for value in reversed(values):
        if value is not None:
            return value
    return None


def field_values[TMatched: MatchedRecord](
    candidates: Sequence[TMatched], field_name: str
) -> list[Any]:
    """Non-null values of ``field_name`` in recency order."""

    values = (getattr(candidate, field_name) for candidate in by_recency(candidates))
    return [value for value in values if value is not None]


@dataclass(slots=True, frozen=True)
class ModeValuePlugin:
    """Assign the most frequent candidate value of a scalar field."""

    field_name: str

    def merge[TMaster: MasterRecord](
        self,
        candidates: Sequence[MatchedRecord],
        accumulator: TMaster,
        raw_candidates: Sequence[MatchedRecord],
    ) -> TMaster:
        _ = raw_candidates
        setattr(accumulator, self.field_name, most_frequent(field_values(candidates, self.field_name)))
        return accumulator


@dataclass(slots=True, frozen=True)
class LatestValuePlugin:
    """Assign the value of the most recently published candidate that has one."""

    field_name: str

    def merge[TMaster: MasterRecord](
        self,
        candidates: Sequence[MatchedRecord],
        accumulator: TMaster,
        raw_candidates: Sequence[MatchedRecord],
    ) -> TMaster:
        _ = raw_candidates
        value = latest(field_values(candidates, self.field_name))
        setattr(accumulator, self.field_name, copy.deepcopy(value))
        return accumulator


@dataclass(slots=True, frozen=True)
class LatestListPlugin:
    """Assign the most recent non-empty list value of a field."""

    field_name: str

    def merge[TMaster: MasterRecord](
        self,
        candidates: Sequence[MatchedRecord],
        accumulator: TMaster,
        raw_candidates: Sequence[MatchedRecord],
    ) -> TMaster:
        _ = raw_candidates
        non_empty = [value for value in field_values(candidates, self.field_name) if value]
        setattr(accumulator, self.field_name, copy.deepcopy(latest(non_empty) or []))
        return accumulator


@dataclass(slots=True, frozen=True)
class UnionPlugin:
    """Order-preserving union of a list field; the newest item wins per key."""

    field_name: str
    key: Callable[[Any], Hashable]

    def merge[TMaster: MasterRecord](
        self,
        candidates: Sequence[MatchedRecord],
        accumulator: TMaster,
        raw_candidates: Sequence[MatchedRecord],
    ) -> TMaster:
        _ = raw_candidates
        merged: dict[Hashable, Any] = {}
        for items in field_values(candidates, self.field_name):
            for item in items:
                merged[self.key(item)] = item
        setattr(accumulator, self.field_name, copy.deepcopy(list(merged.values())))
        return accumulator


def drop_duplicate_sources[TMatched: MatchedRecord](candidates: list[TMatched]) -> list[TMatched]:
    """Keep the last candidate per ``(source, source_id)``; candidates without one are kept."""

    kept: dict[object, TMatched] = {}
    for index, candidate in enumerate(candidates):
        key: object = candidate.source_key if candidate.source_id else ("#", index)
        kept.pop(key, None)
        kept[key] = candidate
    return list(kept.values())


def record_lineage[TMaster: MasterRecord](
    item: TMaster, raw_candidates: Sequence[MatchedRecord]
) -> TMaster:
    """Store which sources and candidate records the master was built from."""

    item.sources = sorted({candidate.source for candidate in raw_candidates if candidate.source})
    item.candidate_ids = sorted(candidate.id for candidate in raw_candidates if candidate.id)
    return item
