"""Port for inbound worker messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pydantic import BaseModel


@runtime_checkable
class Message(Protocol):
    """Message delivered to a worker; delivery and acknowledgement belong to the transport."""

    @property
    def metadata(self) -> dict[str, Any]: ...

    def get_value(self, key: str) -> str | None: ...

    def set_value(self, key: str, value: str) -> Message: ...

    def get_object[TModel: BaseModel](self, key: str, model: type[TModel]) -> TModel | None: ...

    def to_json(self) -> str: ...
