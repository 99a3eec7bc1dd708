"""Persistence: key-value backends and the reconciliation store."""

from ac_extractor.store.kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from ac_extractor.store.reconciliation import ReconciliationStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "ReconciliationStore",
    "SqliteKeyValueStore",
]
