"""SQLAlchemy adapter package for procmaster."""

from __future__ import annotations

from .mappings import metadata
from .repositories import (
    SqlAlchemyIndicatorRepository,
    SqlAlchemyMasterBodyRepository,
    SqlAlchemyMasterRepository,
    SqlAlchemyMasterTenderRepository,
    SqlAlchemyMatchedBodyRepository,
    SqlAlchemyMatchedRepository,
    SqlAlchemyMatchedTenderRepository,
)
from .unit_of_work import (
    SqlAlchemyBodyMasteringUnitOfWork,
    SqlAlchemyTenderMasteringUnitOfWork,
    SqlAlchemyTenderSizeUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyBodyMasteringUnitOfWork",
    "SqlAlchemyIndicatorRepository",
    "SqlAlchemyMasterBodyRepository",
    "SqlAlchemyMasterRepository",
    "SqlAlchemyMasterTenderRepository",
    "SqlAlchemyMatchedBodyRepository",
    "SqlAlchemyMatchedRepository",
    "SqlAlchemyMatchedTenderRepository",
    "SqlAlchemyTenderMasteringUnitOfWork",
    "SqlAlchemyTenderSizeUnitOfWork",
    "StartupError",
    "metadata",
    "shutdown",
    "startup",
]
