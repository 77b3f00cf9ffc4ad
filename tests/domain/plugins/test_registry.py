from __future__ import annotations

import pytest

from procmaster.domain.plugins import DuplicatePluginError, PluginRegistry


def test_registry_keeps_registration_order() -> None:
    registry: PluginRegistry[str] = PluginRegistry("merge")

    registry.register("zeta", "z").register("alpha", "a").register("mid", "m")

    assert registry.names() == ["zeta", "alpha", "mid"]
    assert registry.plugins() == [("zeta", "z"), ("alpha", "a"), ("mid", "m")]
    assert list(registry) == ["z", "a", "m"]


def test_registry_rejects_duplicate_names() -> None:
    registry: PluginRegistry[str] = PluginRegistry("merge").register("title", "first")

    with pytest.raises(DuplicatePluginError, match="title"):
        registry.register("title", "second")

    assert registry.get("title") == "first"
    assert len(registry) == 1


def test_registry_membership_and_lookup() -> None:
    registry: PluginRegistry[int] = PluginRegistry("indicator").register("gpa", 1)

    assert "gpa" in registry
    assert "single_bid" not in registry
    assert registry.get("single_bid") is None
    assert "gpa" in repr(registry)


def test_plugins_returns_a_snapshot() -> None:
    registry: PluginRegistry[int] = PluginRegistry().register("a", 1)

    snapshot = registry.plugins()
    registry.register("b", 2)

    assert snapshot == [("a", 1)]
