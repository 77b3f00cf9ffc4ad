"""Message-driven mastering of one candidate group into one master record.

A run loads every candidate and any existing master for a group id, filters the
candidates, folds them through the merge plugins in registration order, saves
the result and replaces its indicators, all inside one unit of work:

    RECEIVED -> LOADED -> FILTERED -> MERGED -> PERSISTED -> INDICATED -> COMMITTED

Source specific behaviour is injected as plain callables rather than overridden
methods, so one orchestrator type serves every source and record kind.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from procmaster.config.mastering import MasteringConfig
from procmaster.domain.mastering.errors import (
    DuplicateMasterError,
    InvalidMessageError,
    UnsupportedOperationError,
)
from procmaster.domain.model import IndicatorType, MasterRecord, MatchedRecord
from procmaster.domain.plugins import IndicatorPlugin, MergePlugin, PluginRegistry

if TYPE_CHECKING:
    from procmaster.domain.ports import MasteringRepositories, MasteringUnitOfWork, Message

GROUP_ID_KEY = "groupId"

log = logging.getLogger(__name__)

type CandidateFilter[TMatched: MatchedRecord] = Callable[[list[TMatched]], list[TMatched]]
type PostMergeHook[TMatched: MatchedRecord, TMaster: MasterRecord] = Callable[
    [TMaster, Sequence[TMatched]], TMaster
]
type PostProcessHook[TMaster: MasterRecord] = Callable[[TMaster], TMaster]
type PersistentIdFactory[TMatched: MatchedRecord] = Callable[[Sequence[TMatched]], str | None]


class MasteringState(StrEnum):
    RECEIVED = "received"
    LOADED = "loaded"
    FILTERED = "filtered"
    MERGED = "merged"
    PERSISTED = "persisted"
    INDICATED = "indicated"
    COMMITTED = "committed"
    FAILED = "failed"


class MasteringStatus(StrEnum):
    MASTERED = "mastered"
    NOTHING_TO_MASTER = "nothing_to_master"
    FAILED = "failed"


@dataclass(slots=True)
class MasteringResult:
    """Outcome of one run; ``NOTHING_TO_MASTER`` is a valid outcome, not an error."""

    group_id: str
    status: MasteringStatus = MasteringStatus.MASTERED
    state: MasteringState = MasteringState.RECEIVED
    master_id: str | None = None
    persistent_id: str | None = None
    candidates: int = 0
    indicators: tuple[IndicatorType, ...] = ()
    duration_ms: float = 0.0
    error: BaseException | None = None

    @classmethod
    def failed(cls, group_id: str, error: BaseException) -> MasteringResult:
        return cls(
            group_id=group_id,
            status=MasteringStatus.FAILED,
            state=MasteringState.FAILED,
            error=error,
        )

    @property
    def succeeded(self) -> bool:
        return self.status is not MasteringStatus.FAILED


def keep_all[TMatched: MatchedRecord](candidates: list[TMatched]) -> list[TMatched]:
    return candidates


def unchanged[TMaster: MasterRecord](item: TMaster) -> TMaster:
    return item


def no_post_merge[TMatched: MatchedRecord, TMaster: MasterRecord](
    item: TMaster, raw_candidates: Sequence[TMatched]
) -> TMaster:
    _ = raw_candidates
    return item


@dataclass
class MasteringOrchestrator[TMatched: MatchedRecord, TMaster: MasterRecord]:
    """Turn the candidates of a group into exactly one persisted master record.

    Concurrent runs for distinct group ids are fine. Runs for the same group id
    must be serialised by the caller (partitioned delivery); the duplicate master
    check below only detects a violation of that assumption.
    """

    name: str
    unit_of_work_factory: Callable[[], MasteringUnitOfWork[TMatched, TMaster]]
    persistent_id: PersistentIdFactory[TMatched]
    merge_plugins: PluginRegistry[MergePlugin[TMatched, TMaster]] = field(
        default_factory=lambda: PluginRegistry("merge")
    )
    indicator_plugins: PluginRegistry[IndicatorPlugin[TMaster]] = field(
        default_factory=lambda: PluginRegistry("indicator")
    )
    general_preprocess: CandidateFilter[TMatched] = keep_all
    source_preprocess: CandidateFilter[TMatched] = keep_all
    post_merge: PostMergeHook[TMatched, TMaster] = no_post_merge
    source_postprocess: PostProcessHook[TMaster] = unchanged
    config: MasteringConfig = field(default_factory=MasteringConfig)
    clock: Callable[[], float] = time.perf_counter

    def handle(self, message: Message) -> MasteringResult:
        """Master the group named by an inbound message."""

        group_id = message.get_value(GROUP_ID_KEY)
        if not group_id:
            raise InvalidMessageError(f"{self.name}: message carries no {GROUP_ID_KEY!r} value")
        return self.master(group_id)

    def master(self, group_id: str) -> MasteringResult:
        """Run mastering for ``group_id``.

        Errors propagate after the unit of work rolls back, so nothing from a failed
        run is committed and the triggering message is not treated as processed.
        """

        started = self.clock()
        result = MasteringResult(group_id=group_id)
        try:
            with self.unit_of_work_factory() as uow:
                self._master_group(group_id, uow.repositories, result)
                uow.commit()
        except Exception:
            log.error(
                "%s: mastering of group id %s failed in state %s",
                self.name,
                group_id,
                result.state,
            )
            raise
        result.state = MasteringState.COMMITTED
        result.duration_ms = (self.clock() - started) * 1000

        if result.status is MasteringStatus.MASTERED:
            log.info(
                "%s: mastering finished for group id %s stored as %s",
                self.name,
                group_id,
                result.master_id,
            )
        if result.duration_ms > self.config.worker_time_threshold_ms:
            log.warning(
                "%s: execution of master worker took %.0f ms for group id %s",
                self.name,
                result.duration_ms,
                group_id,
            )
        return result

    def resend(self, version: str, date_from: str, date_to: str) -> None:
        _ = (version, date_from, date_to)
        raise UnsupportedOperationError("Master worker does not support message resending.")

    def _master_group(
        self,
        group_id: str,
        repositories: MasteringRepositories[TMatched, TMaster],
        result: MasteringResult,
    ) -> None:
        select_started = self.clock()
        raw_candidates = list(repositories.matched.get_by_group_id(group_id))
        log.info(
            "%s: selection of %s matched records took %.0f ms",
            self.name,
            len(raw_candidates),
            (self.clock() - select_started) * 1000,
        )

        existing = repositories.masters.get_by_group_id(group_id)
        if len(existing) > 1:
            log.error(
                "There are more (%s) mastered instances with the same group id %s.",
                len(existing),
                group_id,
            )
            raise DuplicateMasterError(group_id, len(existing))
        item = existing[0] if existing else repositories.masters.get_empty_instance()
        item.persistent_id = self.persistent_id(raw_candidates)
        result.persistent_id = item.persistent_id
        result.state = MasteringState.LOADED

        candidates = self.general_preprocess(list(raw_candidates))
        if not candidates:
            log.info("No items left for mastering after the general preprocessing.")
            result.status = MasteringStatus.NOTHING_TO_MASTER
            return
        candidates = self.source_preprocess(candidates)
        if not candidates:
            log.info("No items left for mastering after the source specific preprocessing.")
            result.status = MasteringStatus.NOTHING_TO_MASTER
            return
        result.candidates = len(candidates)
        result.state = MasteringState.FILTERED

        for plugin_name, plugin in self.merge_plugins.plugins():
            log.debug("%s: running merge plugin %s", self.name, plugin_name)
            item = plugin.merge(candidates, item, raw_candidates)
        item.group_id = group_id
        item = self.post_merge(item, raw_candidates)
        item = self.source_postprocess(item)
        result.state = MasteringState.MERGED

        master_id = repositories.masters.save(item)
        result.master_id = master_id
        result.state = MasteringState.PERSISTED

        stored: list[IndicatorType] = []
        for _plugin_name, plugin in self.indicator_plugins.plugins():
            indicator = plugin.evaluate(item)
            repositories.indicators.delete(master_id, plugin.indicator_type)
            if indicator is not None:
                indicator.related_entity_id = master_id
                repositories.indicators.save(indicator)
                stored.append(indicator.type)
        result.indicators = tuple(stored)
        result.state = MasteringState.INDICATED
