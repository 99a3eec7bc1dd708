"""Reconcile extracted records into the persisted dataset."""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Union

from ac_extractor.models.dataset import Dataset
from ac_extractor.models.record import BaseRecord, RecordKind, record_model_for
from ac_extractor.settings import DEFAULT_STORAGE_KEY
from ac_extractor.store.kv import KeyValueStore

logger = logging.getLogger(__name__)

IncomingRecord = Union[BaseRecord, Mapping[str, Any]]


class ReconciliationStore:
    """
    Owns the canonical dataset under one key of a key-value store.

    upsert_many and delete_one are the only mutation paths. Each is a
    read-modify-write of the whole dataset with no suspension point, so a
    caller that processes one message at a time never loses an update.
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def initialize(self) -> Dataset:
        """Create the empty dataset on first install; never overwrites existing data."""
        if self._kv.get(self._key) is None:
            dataset = Dataset()
            self._save(dataset)
            logger.info("Initialized empty dataset under %s", self._key)
            return dataset
        return self.get()

    def get(self) -> Dataset:
        """Current dataset, or a structurally empty one if nothing is stored yet."""
        return Dataset.from_storage(self._kv.get(self._key))

    def upsert_many(self, kind: RecordKind | str, records: Iterable[IncomingRecord]) -> Dataset:
        """
        Merge records by id: replace in place when the id exists, else append.
        Sets lastSync once, after all records are applied.
        """
        kind = RecordKind(kind)
        model = record_model_for(kind)
        dataset = self.get()
        existing = dataset.records(kind)
        positions = {record.id: i for i, record in enumerate(existing)}

        inserted = updated = 0
        for incoming in records:
            record = self._coerce(model, incoming)
            if record.id in positions:
                existing[positions[record.id]] = record
                updated += 1
            else:
                positions[record.id] = len(existing)
                existing.append(record)
                inserted += 1

        dataset.last_sync = datetime.now(timezone.utc)
        self._save(dataset)
        logger.info("Reconciled %s: %d new, %d updated, %d total", kind.value, inserted, updated, len(existing))
        return dataset

    def delete_one(self, kind: RecordKind | str, record_id: str) -> Dataset:
        """Remove the record with this id. Absent id is a no-op, not an error."""
        kind = RecordKind(kind)
        dataset = self.get()
        records = dataset.records(kind)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            logger.debug("Delete of %s %s: not present", kind.value, record_id)
            return dataset
        records[:] = remaining
        self._save(dataset)
        logger.info("Deleted %s %s", kind.value, record_id)
        return dataset

    @staticmethod
    def _coerce(model: type[BaseRecord], incoming: IncomingRecord) -> BaseRecord:
        if isinstance(incoming, model):
            return incoming
        if isinstance(incoming, BaseRecord):
            return model.model_validate(incoming.model_dump(by_alias=True))
        return model.model_validate(incoming)

    def _save(self, dataset: Dataset) -> None:
        self._kv.set(self._key, dataset.to_storage())
