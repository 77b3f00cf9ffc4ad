"""Mastering worker defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_positive_int

DEFAULT_WORKER_TIME_THRESHOLD_MS = 1000
DEFAULT_PAGE_SIZE = 1000


@dataclass(frozen=True, slots=True)
class MasteringConfig:
    # soft budget; exceeding it only logs a warning
    worker_time_threshold_ms: int = DEFAULT_WORKER_TIME_THRESHOLD_MS
    page_size: int = DEFAULT_PAGE_SIZE


def get_mastering_config() -> MasteringConfig:
    return MasteringConfig(
        worker_time_threshold_ms=optional_positive_int(
            "PROCMASTER_TIME_THRESHOLD_MS", DEFAULT_WORKER_TIME_THRESHOLD_MS
        ),
        page_size=optional_positive_int("PROCMASTER_PAGE_SIZE", DEFAULT_PAGE_SIZE),
    )
