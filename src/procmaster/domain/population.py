"""Resolution of body references on master tenders."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from procmaster.domain.model import MasterTender
    from procmaster.domain.ports import MasterBodyRepository


def populate_bodies(
    tenders: Iterable[MasterTender], bodies: MasterBodyRepository
) -> list[MasterTender]:
    """Return copies of ``tenders`` with every buyer reference resolved.

    All referenced bodies are fetched in a single repository call. References
    without a stored master body keep ``body = None``.
    """

    populated = [copy.deepcopy(tender) for tender in tenders]
    group_ids = {ref.group_id for tender in populated for ref in tender.buyers}
    if not group_ids:
        return populated

    by_group_id = {
        body.group_id: body
        for body in bodies.get_by_group_ids(sorted(group_ids))
        if body.group_id is not None
    }
    for tender in populated:
        for ref in tender.buyers:
            ref.body = by_group_id.get(ref.group_id)
    return populated
