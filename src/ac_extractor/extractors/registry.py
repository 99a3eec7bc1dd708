"""Registry mapping record kinds to their extractors."""

from typing import Type

from ac_extractor.extractors.base import BaseExtractor
from ac_extractor.extractors.contacts import ContactsExtractor
from ac_extractor.extractors.deals import DealsExtractor
from ac_extractor.extractors.tasks import TasksExtractor
from ac_extractor.models.record import RecordKind


class ExtractorRegistry:
    """Discovers and provides page extractors."""

    _extractors: dict[RecordKind, Type[BaseExtractor]] = {
        RecordKind.CONTACTS: ContactsExtractor,
        RecordKind.DEALS: DealsExtractor,
        RecordKind.TASKS: TasksExtractor,
    }

    @classmethod
    def get(cls, kind: RecordKind | str, **kwargs) -> BaseExtractor:
        """Get an extractor instance for the given kind. kwargs passed to extractor __init__."""
        try:
            key = kind if isinstance(kind, RecordKind) else RecordKind(kind.lower())
            extractor_cls = cls._extractors[key]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown record kind: {kind}. Available: {cls.available_kinds()}")
        return extractor_cls(**kwargs)

    @classmethod
    def available_kinds(cls) -> list[str]:
        """Return list of supported record kinds."""
        return [kind.value for kind in cls._extractors]
