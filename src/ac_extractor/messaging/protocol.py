"""Request/response messages exchanged between page contexts and the store."""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from ac_extractor.models.dataset import Dataset
from ac_extractor.models.record import BaseRecord, RecordKind


class MessageType(str, Enum):
    EXTRACT_DATA = "EXTRACT_DATA"
    GET_DATA = "GET_DATA"
    DELETE_RECORD = "DELETE_RECORD"
    TRIGGER_EXTRACT = "TRIGGER_EXTRACT"
    START_EXTRACTION = "START_EXTRACTION"


class Message(BaseModel):
    """
    One request. Records cross the context boundary as plain dicts in the
    persisted (camelCase) layout; the receiving side validates them.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: MessageType
    kind: Optional[RecordKind] = Field(default=None, alias="dataType")
    records: list[dict[str, Any]] = Field(default_factory=list, alias="data")
    id: Optional[str] = None
    tab_id: Optional[int] = Field(default=None, alias="tabId")

    @classmethod
    def extract_data(cls, kind: RecordKind, records: Iterable[BaseRecord]) -> "Message":
        return cls(
            type=MessageType.EXTRACT_DATA,
            kind=kind,
            records=[r.model_dump(mode="json", by_alias=True) for r in records],
        )

    @classmethod
    def get_data(cls) -> "Message":
        return cls(type=MessageType.GET_DATA)

    @classmethod
    def delete_record(cls, kind: RecordKind, record_id: str) -> "Message":
        return cls(type=MessageType.DELETE_RECORD, kind=kind, id=record_id)

    @classmethod
    def trigger_extract(cls, tab_id: int) -> "Message":
        return cls(type=MessageType.TRIGGER_EXTRACT, tab_id=tab_id)

    @classmethod
    def start_extraction(cls) -> "Message":
        return cls(type=MessageType.START_EXTRACTION)


class Response(BaseModel):
    """Reply to one Message: success flag plus dataset or error text."""

    success: bool
    data: Optional[Dataset] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[Dataset] = None) -> "Response":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "Response":
        return cls(success=False, error=error)
