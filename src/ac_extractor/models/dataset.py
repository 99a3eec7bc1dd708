"""The persisted dataset: one ordered sequence per kind plus last-sync time."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ac_extractor.models.record import (
    BaseRecord,
    ContactRecord,
    DealRecord,
    RecordKind,
    TaskRecord,
)


class Dataset(BaseModel):
    """
    Canonical collection of all record kinds.
    Ids are unique within each sequence; order is insertion order except where
    an upsert replaced a record in place.
    """

    model_config = ConfigDict(populate_by_name=True)

    contacts: list[ContactRecord] = Field(default_factory=list)
    deals: list[DealRecord] = Field(default_factory=list)
    tasks: list[TaskRecord] = Field(default_factory=list)
    last_sync: Optional[datetime] = Field(default=None, alias="lastSync")

    def records(self, kind: RecordKind | str) -> list[BaseRecord]:
        """Return the sequence for a kind (the live list, not a copy)."""
        return getattr(self, RecordKind(kind).value)

    def find(self, kind: RecordKind | str, record_id: str) -> Optional[BaseRecord]:
        """Return the record with the given id, or None."""
        for record in self.records(kind):
            if record.id == record_id:
                return record
        return None

    def counts(self) -> dict[str, int]:
        """Number of records per kind."""
        return {kind.value: len(self.records(kind)) for kind in RecordKind}

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the persisted JSON layout (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_storage(cls, value: Optional[dict[str, Any]]) -> "Dataset":
        """Parse a persisted value; missing or empty value yields an empty dataset."""
        if not value:
            return cls()
        # Keys written as null by older versions fall back to their defaults.
        return cls.model_validate({k: v for k, v in value.items() if v is not None})
