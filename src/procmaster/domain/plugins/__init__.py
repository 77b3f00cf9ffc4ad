"""Plugin registry and plugin contracts."""

from __future__ import annotations

from .contracts import IndicatorPlugin, MergePlugin
from .registry import DuplicatePluginError, PluginRegistry

__all__ = [
    "DuplicatePluginError",
    "IndicatorPlugin",
    "MergePlugin",
    "PluginRegistry",
]
