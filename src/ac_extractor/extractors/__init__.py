"""Strategy-chain extractors for contacts, deals and tasks pages."""

from ac_extractor.extractors.base import BaseExtractor, ExtractionPass, LayoutStrategy
from ac_extractor.extractors.registry import ExtractorRegistry

__all__ = ["BaseExtractor", "ExtractionPass", "ExtractorRegistry", "LayoutStrategy"]
