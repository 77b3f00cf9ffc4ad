"""JSON document codec for domain records stored in the ``data`` column."""

from __future__ import annotations

from typing import Any, Final

from pydantic import TypeAdapter

from procmaster.domain.model import MasterBody, MasterTender, MatchedBody, MatchedTender


class DocumentCodec[TRecord]:
    """Dump and load one record type through a pydantic ``TypeAdapter``."""

    def __init__(self, record_type: type[TRecord], *, exclude: dict[str, Any] | None = None) -> None:
        self.record_type = record_type
        self._adapter: TypeAdapter[TRecord] = TypeAdapter(record_type)
        self._exclude = exclude

    def dump(self, record: TRecord) -> str:
        return self._adapter.dump_json(record, exclude=self._exclude).decode()

    def load(self, document: str | bytes) -> TRecord:
        return self._adapter.validate_json(document)


# resolved buyer bodies are a read-time view and never stored
_TENDER_EXCLUDE: Final[dict[str, Any]] = {"buyers": {"__all__": {"body"}}}

MATCHED_TENDER_CODEC: Final = DocumentCodec(MatchedTender, exclude=_TENDER_EXCLUDE)
MATCHED_BODY_CODEC: Final = DocumentCodec(MatchedBody)
MASTER_TENDER_CODEC: Final = DocumentCodec(MasterTender, exclude=_TENDER_EXCLUDE)
MASTER_BODY_CODEC: Final = DocumentCodec(MasterBody)
