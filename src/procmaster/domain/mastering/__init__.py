"""Mastering core: turn grouped candidate records into one canonical record per group.

Flow per inbound group id:
1) load candidates and any existing master (more than one master is fatal)
2) stamp the persistent id computed from the unfiltered candidates
3) general, then source specific candidate filtering (empty means no-op)
4) merge plugins in registration order, then the finishing hooks
5) save, then replace indicators for the saved record
6) commit
"""

from __future__ import annotations

from .errors import (
    DuplicateMasterError,
    InvalidMessageError,
    UnrecoverableError,
    UnsupportedOperationError,
)
from .orchestrator import (
    GROUP_ID_KEY,
    MasteringOrchestrator,
    MasteringResult,
    MasteringState,
    MasteringStatus,
)
from .persistent_id import WeightedHash, body_persistent_id, tender_persistent_id

__all__ = [
    "GROUP_ID_KEY",
    "DuplicateMasterError",
    "InvalidMessageError",
    "MasteringOrchestrator",
    "MasteringResult",
    "MasteringState",
    "MasteringStatus",
    "UnrecoverableError",
    "UnsupportedOperationError",
    "WeightedHash",
    "body_persistent_id",
    "tender_persistent_id",
]
