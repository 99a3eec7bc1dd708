"""Data models for extracted records and the persisted dataset."""

from ac_extractor.models.dataset import Dataset
from ac_extractor.models.record import (
    BaseRecord,
    ContactRecord,
    DealRecord,
    Record,
    RecordKind,
    TaskRecord,
    record_model_for,
)

__all__ = [
    "BaseRecord",
    "ContactRecord",
    "Dataset",
    "DealRecord",
    "Record",
    "RecordKind",
    "TaskRecord",
    "record_model_for",
]
