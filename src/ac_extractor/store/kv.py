"""Key-value persistence with whole-object change notifications."""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str, Any], None]

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class KeyValueStore(ABC):
    """
    Minimal get/set store. Every set() replaces the whole value and notifies
    subscribers with the new value; consumers must not treat it as a diff.
    """

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the JSON value stored under key, or None."""
        pass

    @abstractmethod
    def _write(self, key: str, value: Any) -> None:
        pass

    def set(self, key: str, value: Any) -> None:
        """Persist value under key, then notify subscribers."""
        self._write(key, value)
        for listener in list(self._listeners):
            try:
                listener(key, value)
            except Exception:
                logger.exception("Change listener failed for key %s", key)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class MemoryKeyValueStore(KeyValueStore):
    """In-memory store; values are round-tripped through JSON like the SQLite store."""

    def __init__(self) -> None:
        super().__init__()
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def _write(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, default=str)


class SqliteKeyValueStore(KeyValueStore):
    """SQLite-backed store: one row per key, value serialized as JSON."""

    def __init__(self, db_path: str | Path = "ac_extractor.db"):
        super().__init__()
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.executescript(SCHEMA)

    def get(self, key: str) -> Optional[Any]:
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return json.loads(row["value"]) if row else None

    def _write(self, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc).isoformat()
        data_str = json.dumps(value, default=str)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, data_str, now),
            )
            conn.commit()

    def keys(self) -> list[str]:
        """All stored keys."""
        with self._connection() as conn:
            rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        return [r["key"] for r in rows]
