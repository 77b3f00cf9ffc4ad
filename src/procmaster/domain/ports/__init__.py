"""Domain port definitions for adapters."""

from __future__ import annotations

from .messaging import Message
from .persistence import (
    IndicatorRepository,
    MasterBodyRepository,
    MasterRepository,
    MasterTenderRepository,
    MatchedRepository,
)
from .unit_of_work import (
    MasteringRepositories,
    MasteringUnitOfWork,
    RepositoryCollection,
    TenderSizeRepositories,
    TenderSizeUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "IndicatorRepository",
    "MasterBodyRepository",
    "MasterRepository",
    "MasterTenderRepository",
    "MasteringRepositories",
    "MasteringUnitOfWork",
    "MatchedRepository",
    "Message",
    "RepositoryCollection",
    "TenderSizeRepositories",
    "TenderSizeUnitOfWork",
    "UnitOfWork",
]
