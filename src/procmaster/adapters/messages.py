"""JSON message envelope handed to workers by the transport."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from procmaster.domain.mastering.errors import InvalidMessageError


def _scalar_to_str(value: object) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    text = str(value).strip()
    return text or None


class JsonMessage(BaseModel):
    """``{"data": {...}, "metadata": {...}}`` with unknown top-level keys ignored."""

    model_config = ConfigDict(extra="ignore")

    data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_json(cls, payload: str | bytes) -> Self:
        try:
            return cls.model_validate_json(payload)
        except ValidationError as exc:
            raise InvalidMessageError(f"Malformed message: {exc.error_count()} error(s)") from exc

    @classmethod
    def with_values(cls, **values: str) -> Self:
        return cls(data=dict(values))

    def to_json(self) -> str:
        return self.model_dump_json()

    def get_value(self, key: str) -> str | None:
        """Scalar value under ``key`` as text; blank and structured values read as ``None``."""
        return _scalar_to_str(self.data.get(key))

    def set_value(self, key: str, value: str) -> Self:
        self.data[key] = value
        return self

    def get_object[TModel: BaseModel](self, key: str, model: type[TModel]) -> TModel | None:
        raw = self.data.get(key)
        if raw is None:
            return None
        try:
            if isinstance(raw, (str, bytes)):
                return model.model_validate_json(raw)
            return model.model_validate(raw)
        except ValidationError as exc:
            raise InvalidMessageError(f"Value under {key!r} is not a valid {model.__name__}") from exc
