"""Tests for record and dataset models."""

import pytest
from pydantic import ValidationError

from ac_extractor.models import (
    BaseRecord,
    ContactRecord,
    Dataset,
    DealRecord,
    RecordKind,
    TaskRecord,
    record_model_for,
)


class TestRecords:
    """Tests for the record models."""

    def test_aliases_and_field_names(self) -> None:
        task = TaskRecord.model_validate({"id": "x", "dueDate": "Mar 3", "linkedTo": "Acme", "isCompleted": True})
        assert task.due_date == "Mar 3"
        assert task.linked_to == "Acme"
        assert task.is_completed is True
        assert TaskRecord(id="x", due_date="Mar 3").due_date == "Mar 3"

    def test_defaults(self) -> None:
        contact = ContactRecord(id="1")
        assert contact.name == "Unknown"
        assert contact.email == "N/A"
        assert contact.owner == "Unassigned"
        assert contact.tags == []
        assert DealRecord(id="1").next_task == "No task"

    def test_id_required(self) -> None:
        with pytest.raises(ValidationError):
            DealRecord(title="no id")
        with pytest.raises(ValidationError):
            DealRecord(id="")

    def test_unknown_fields_kept(self) -> None:
        contact = ContactRecord(id="1", company="Acme")
        assert contact.model_dump()["company"] == "Acme"

    def test_label(self) -> None:
        assert ContactRecord(id="1", name="Ada").label == "Ada"
        assert DealRecord(id="1", title="Renewal").label == "Renewal"
        assert TaskRecord(id="1", title="Call").label == "Call"

    def test_label_defaults_to_id(self) -> None:
        class NoteRecord(BaseRecord):
            body: str = ""

        assert NoteRecord(id="n-1", body="hello").label == "n-1"

    def test_record_model_for(self) -> None:
        assert record_model_for("deals") is DealRecord
        assert record_model_for(RecordKind.TASKS) is TaskRecord


class TestDataset:
    """Tests for Dataset."""

    def test_from_storage_empty(self) -> None:
        assert Dataset.from_storage(None) == Dataset()
        assert Dataset.from_storage({}) == Dataset()

    def test_from_storage_tolerates_nulls(self) -> None:
        dataset = Dataset.from_storage({"contacts": None, "deals": [{"id": "1"}], "lastSync": None})
        assert dataset.contacts == []
        assert dataset.deals[0].id == "1"
        assert dataset.last_sync is None

    def test_legacy_millisecond_last_sync(self) -> None:
        dataset = Dataset.from_storage({"lastSync": 1700000000000})
        assert dataset.last_sync.year == 2023

    def test_storage_layout(self) -> None:
        dataset = Dataset(tasks=[TaskRecord(id="t", due_date="Mar 3")])
        stored = dataset.to_storage()
        assert set(stored) == {"contacts", "deals", "tasks", "lastSync"}
        assert stored["tasks"][0]["dueDate"] == "Mar 3"
        assert Dataset.from_storage(stored) == dataset

    def test_records_is_live_list(self) -> None:
        dataset = Dataset()
        dataset.records("deals").append(DealRecord(id="1"))
        assert dataset.counts() == {"contacts": 0, "deals": 1, "tasks": 0}
        assert dataset.find(RecordKind.DEALS, "1").id == "1"
        assert dataset.find(RecordKind.DEALS, "2") is None
