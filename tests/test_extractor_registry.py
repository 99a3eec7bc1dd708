"""Tests for ExtractorRegistry."""

import pytest

from ac_extractor.extractors import ExtractorRegistry
from ac_extractor.extractors.contacts import ContactsExtractor
from ac_extractor.extractors.deals import DealsExtractor
from ac_extractor.extractors.tasks import TasksExtractor
from ac_extractor.models.record import RecordKind


class TestExtractorRegistry:
    """Tests for ExtractorRegistry."""

    def test_get_by_kind(self) -> None:
        assert isinstance(ExtractorRegistry.get(RecordKind.CONTACTS), ContactsExtractor)
        assert isinstance(ExtractorRegistry.get(RecordKind.DEALS), DealsExtractor)
        assert isinstance(ExtractorRegistry.get(RecordKind.TASKS), TasksExtractor)

    def test_get_by_name_case_insensitive(self) -> None:
        assert isinstance(ExtractorRegistry.get("Deals"), DealsExtractor)

    def test_kwargs_passed_through(self) -> None:
        extractor = ExtractorRegistry.get("tasks", timeout_ms=250)
        assert extractor.timeout_ms == 250

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown record kind"):
            ExtractorRegistry.get("invoices")

    def test_available_kinds(self) -> None:
        assert ExtractorRegistry.available_kinds() == ["contacts", "deals", "tasks"]

    def test_ready_selector_covers_every_layout(self) -> None:
        extractor = ExtractorRegistry.get("contacts")
        for strategy in extractor.strategies:
            assert strategy.root_selector in extractor.ready_selector
