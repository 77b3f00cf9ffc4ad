"""Body mastering wiring."""

from __future__ import annotations

from operator import attrgetter
from typing import TYPE_CHECKING

from procmaster.domain.mastering.merge import (
    LatestValuePlugin,
    ModeValuePlugin,
    UnionPlugin,
    drop_duplicate_sources,
    record_lineage,
)
from procmaster.domain.mastering.orchestrator import MasteringOrchestrator
from procmaster.domain.mastering.persistent_id import body_persistent_id
from procmaster.domain.model import MasterBody, MatchedBody
from procmaster.domain.plugins import MergePlugin, PluginRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from procmaster.config.mastering import MasteringConfig
    from procmaster.domain.mastering.sources import MasteringSource
    from procmaster.domain.ports import MasteringUnitOfWork

type BodyMergeRegistry = PluginRegistry[MergePlugin[MatchedBody, MasterBody]]


def finalize_body(item: MasterBody, raw_candidates: Sequence[MatchedBody]) -> MasterBody:
    if item.name:
        item.name = " ".join(item.name.split())
    return record_lineage(item, raw_candidates)


def register_common_body_plugins(registry: BodyMergeRegistry) -> BodyMergeRegistry:
    return (
        registry.register("name", ModeValuePlugin("name"))
        .register("country", ModeValuePlugin("country"))
        .register("body_ids", UnionPlugin("body_ids", key=attrgetter("key")))
        .register("address", LatestValuePlugin("address"))
        .register("buyer_type", ModeValuePlugin("buyer_type"))
        .register("email", LatestValuePlugin("email"))
        .register("main_activities", UnionPlugin("main_activities", key=str))
    )


def build_body_orchestrator(
    source: MasteringSource[MatchedBody, MasterBody],
    *,
    unit_of_work_factory: Callable[[], MasteringUnitOfWork[MatchedBody, MasterBody]],
    config: MasteringConfig,
) -> MasteringOrchestrator[MatchedBody, MasterBody]:
    if source.kind is not MasterBody.KIND:
        raise ValueError(f"Source {source.name!r} masters {source.kind} records, not bodies")
    merge_plugins = register_common_body_plugins(PluginRegistry("body merge"))
    for name, plugin in source.plugins:
        merge_plugins.register(name, plugin)

    return MasteringOrchestrator[MatchedBody, MasterBody](
        name=f"{source.name}_body_master",
        unit_of_work_factory=unit_of_work_factory,
        persistent_id=body_persistent_id,
        merge_plugins=merge_plugins,
        general_preprocess=drop_duplicate_sources,
        source_preprocess=source.preprocess,
        post_merge=finalize_body,
        source_postprocess=source.postprocess,
        config=config,
    )
