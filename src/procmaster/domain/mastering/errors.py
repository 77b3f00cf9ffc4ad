"""Errors raised by mastering and enrichment workers."""

from __future__ import annotations


class UnrecoverableError(RuntimeError):
    """Fatal condition that must reach an operator and must not be retried automatically."""


class DuplicateMasterError(UnrecoverableError):
    """More than one master record exists for one group id."""

    def __init__(self, group_id: str, count: int) -> None:
        super().__init__(f"There are {count} mastered instances with the same group id {group_id}")
        self.group_id = group_id
        self.count = count


class UnsupportedOperationError(UnrecoverableError):
    """Operation the worker deliberately does not implement."""


class InvalidMessageError(UnrecoverableError):
    """Inbound message lacks a value the worker needs."""
