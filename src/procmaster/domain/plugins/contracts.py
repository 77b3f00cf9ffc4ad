"""Contracts implemented by merge and indicator plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from procmaster.domain.model import MasterRecord, MatchedRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from procmaster.domain.model import Indicator, IndicatorType


@runtime_checkable
class MergePlugin[TMatched: MatchedRecord, TMaster: MasterRecord](Protocol):
    """Folds the candidate set into the accumulator and returns it.

    ``candidates`` is the filtered set being mastered. ``raw_candidates`` is always the
    set as loaded, before either filtering stage, so it still holds candidates the
    filters dropped; read it only for lineage, never to pick field values.

    Plugins assign every field they own on each run, ``None`` included, so values
    left over from a previous run never survive.
    """

    def merge(
        self,
        candidates: Sequence[TMatched],
        accumulator: TMaster,
        raw_candidates: Sequence[TMatched],
    ) -> TMaster: ...


@runtime_checkable
class IndicatorPlugin[TMaster: MasterRecord](Protocol):
    """Pure read of a finished master record yielding zero or one indicator."""

    @property
    def indicator_type(self) -> IndicatorType: ...

    def evaluate(self, master: TMaster) -> Indicator | None: ...
