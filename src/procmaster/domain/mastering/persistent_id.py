"""Stable cross-run identifiers computed from a candidate set.

The storage id of a master record never changes for a group, but groups are
recomputed upstream. The persistent id lets consumers link masters produced from
overlapping candidate sets: it is anchored on a part of the set that adding
later notices does not move.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from procmaster.domain.model import MatchedBody, MatchedRecord, MatchedTender

UNKNOWN_COUNTRY = "XX"
DIGEST_LENGTH = 24


@dataclass(slots=True, frozen=True)
class WeightedHash:
    hash: str
    weight: int


def _country_prefix(candidate: MatchedRecord) -> str:
    return (candidate.country or UNKNOWN_COUNTRY).upper()


def anchor_candidate[TMatched: MatchedRecord](candidates: Sequence[TMatched]) -> TMatched | None:
    """Earliest published candidate; source and source id break ties."""

    if not candidates:
        return None
    return min(
        candidates,
        key=lambda candidate: (
            candidate.publication_date or date.max,
            candidate.source or "",
            candidate.source_id or "",
            candidate.id or "",
        ),
    )


def anchored_persistent_id(candidates: Sequence[MatchedRecord]) -> str | None:
    """Country prefixed digest of the anchor candidate's source identity."""

    anchor = anchor_candidate(candidates)
    if anchor is None:
        return None
    seed = f"{anchor.source or ''}|{anchor.source_id or anchor.id or ''}"
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
    return f"{_country_prefix(anchor)}_{digest}"


def tender_persistent_id(candidates: Sequence[MatchedTender]) -> str | None:
    return anchored_persistent_id(candidates)


def weighted_hashes(candidates: Sequence[MatchedBody]) -> list[WeightedHash]:
    """Candidate hashes weighted by how many candidates share them, heaviest first."""

    weights: dict[str, int] = {}
    for candidate in candidates:
        if candidate.hash:
            weights[candidate.hash] = weights.get(candidate.hash, 0) + 1
    ordered = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    return [WeightedHash(hash=value, weight=weight) for value, weight in ordered]


def body_persistent_id(candidates: Sequence[MatchedBody]) -> str | None:
    hashes = weighted_hashes(candidates)
    if not hashes:
        return anchored_persistent_id(candidates)
    heaviest = hashes[0].hash
    country = next(
        (_country_prefix(c) for c in candidates if c.hash == heaviest and c.country),
        UNKNOWN_COUNTRY,
    )
    return f"{country}_{heaviest}"

