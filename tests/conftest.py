"""Pytest fixtures for ac-extractor tests."""

from pathlib import Path

import pytest

from ac_extractor.dom import LiveDocument
from ac_extractor.store import MemoryKeyValueStore, ReconciliationStore, SqliteKeyValueStore
from tests.pages import (
    ACTIVECAMPAIGN_CONTACTS_HTML,
    CONTACTS_URL,
    DEAL_BOARD_HTML,
    DEALS_URL,
    TASKS_HTML,
    TASKS_URL,
)


@pytest.fixture
def memory_kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(memory_kv: MemoryKeyValueStore) -> ReconciliationStore:
    """ReconciliationStore over an in-memory key-value store."""
    return ReconciliationStore(memory_kv)


@pytest.fixture
def sqlite_store(tmp_path: Path) -> ReconciliationStore:
    """ReconciliationStore over a temporary SQLite database."""
    return ReconciliationStore(SqliteKeyValueStore(tmp_path / "ac_extractor.db"))


@pytest.fixture
def deal_board() -> LiveDocument:
    return LiveDocument(DEAL_BOARD_HTML, url=DEALS_URL)


@pytest.fixture
def tasks_page() -> LiveDocument:
    return LiveDocument(TASKS_HTML, url=TASKS_URL)


@pytest.fixture
def contacts_page() -> LiveDocument:
    return LiveDocument(ACTIVECAMPAIGN_CONTACTS_HTML, url=CONTACTS_URL)
