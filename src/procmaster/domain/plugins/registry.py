"""Ordered, name-keyed plugin registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)


class DuplicatePluginError(ValueError):
    """Raised when a plugin name is registered twice in the same registry."""


class PluginRegistry[TPlugin]:
    """Named plugins kept in registration (FIFO) order.

    Iteration never re-sorts: the order plugins were registered in is the order
    they run in. A name can be registered only once per registry.
    """

    def __init__(self, name: str = "plugins") -> None:
        self.name = name
        self._plugins: dict[str, TPlugin] = {}

    def register(self, name: str, plugin: TPlugin) -> PluginRegistry[TPlugin]:
        if name in self._plugins:
            raise DuplicatePluginError(f"Plugin {name!r} is already registered in {self.name}")
        self._plugins[name] = plugin
        log.debug("Registered %s plugin %s (%s)", self.name, name, type(plugin).__name__)
        return self

    def plugins(self) -> list[tuple[str, TPlugin]]:
        """Return ``(name, plugin)`` pairs in registration order."""
        return list(self._plugins.items())

    def names(self) -> list[str]:
        return list(self._plugins)

    def get(self, name: str) -> TPlugin | None:
        return self._plugins.get(name)

    def __iter__(self) -> Iterator[TPlugin]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __repr__(self) -> str:
        return f"PluginRegistry({self.name!r}, {self.names()!r})"
