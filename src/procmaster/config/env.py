"""Typed readers for optional environment settings."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def optional_positive_int(name: str, default: int) -> int:
    """Read ``name`` as a positive integer; unset or blank means ``default``."""

    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value
