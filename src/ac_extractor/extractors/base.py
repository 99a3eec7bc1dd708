"""Strategy-chain base for page extractors."""

import logging
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from lxml.html import HtmlElement

from ac_extractor.dom.document import LiveDocument, select_all
from ac_extractor.dom.wait import await_element
from ac_extractor.errors import ElementNotFound, ParseFailure
from ac_extractor.extractors.selectors import FieldSpec
from ac_extractor.models.record import BaseRecord, RecordKind, record_model_for
from ac_extractor.settings import DEFAULT_READY_TIMEOUT_MS

logger = logging.getLogger(__name__)


def _always(values: dict[str, Any]) -> bool:
    return True


@dataclass
class Container:
    """One element a strategy parses into (at most) one record."""

    element: HtmlElement
    index: int
    group: Optional[HtmlElement] = None


@dataclass(frozen=True)
class LayoutStrategy:
    """
    One known page layout.

    root_selector finds the layout's top-level elements. Without item_selector
    each root is a container; with it, containers are the items found inside
    each root and the root is kept as the container's group.
    """

    name: str
    root_selector: str
    fields: tuple[FieldSpec, ...]
    item_selector: Optional[str] = None
    min_cells: int = 0
    accept: Callable[[dict[str, Any]], bool] = _always

    def roots(self, document: LiveDocument) -> list[HtmlElement]:
        return document.query_selector_all(self.root_selector)

    def containers(self, document: LiveDocument) -> list[Container]:
        """Containers in document order, indexed across the whole pass."""
        found: list[Container] = []
        for root in self.roots(document):
            if self.item_selector is None:
                found.append(Container(root, len(found)))
                continue
            for item in select_all(root, self.item_selector):
                found.append(Container(item, len(found), group=root))
        return found

    def parse(self, container: Container) -> Optional[dict[str, Any]]:
        """
        Map a container to field values via each field's selector cascade.
        Returns None when the container is not a record of this layout
        (too few cells, or rejected by accept).
        """
        if self.min_cells and len(select_all(container.element, "td")) < self.min_cells:
            return None
        values = {
            spec.name: spec.resolve(container.group if spec.scope == "group" else container.element)
            for spec in self.fields
        }
        return values if self.accept(values) else None


@dataclass
class ExtractionPass:
    """State of a single extraction pass: clock, committed strategy, output."""

    kind: RecordKind
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    strategy: Optional[str] = None
    records: list[BaseRecord] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)
    skipped: int = 0

    @property
    def timestamp_ms(self) -> int:
        return int(self.started_at.timestamp() * 1000)

    def synthesize_id(self, prefix: str, index: int) -> str:
        """
        Fallback id for containers without a native identifier.
        Only unique within this pass; never stable across passes.
        """
        return f"{prefix}_{index}_{self.timestamp_ms}"


class BaseExtractor(ABC):
    """
    Extractor for one record kind.

    Subclasses declare an ordered tuple of layout strategies. The first strategy
    whose root selector matches at least one element is used exclusively; a
    container that fails to parse is logged and skipped.
    """

    kind: RecordKind
    id_prefix: str = "record"
    strategies: tuple[LayoutStrategy, ...] = ()

    def __init__(self, timeout_ms: int = DEFAULT_READY_TIMEOUT_MS):
        self.timeout_ms = timeout_ms

    @property
    def ready_selector(self) -> str:
        """Selector group that matches when any known layout has rendered."""
        return ", ".join(strategy.root_selector for strategy in self.strategies)

    def select_strategy(self, document: LiveDocument) -> Optional[LayoutStrategy]:
        """First strategy with at least one root element on the page."""
        for strategy in self.strategies:
            if strategy.roots(document):
                return strategy
        return None

    async def extract(self, document: LiveDocument) -> list[BaseRecord]:
        """Wait for the page to render, then extract. Timeout yields an empty list."""
        result = await self.extract_pass(document)
        return result.records

    async def extract_pass(self, document: LiveDocument) -> ExtractionPass:
        """Like extract(), but returns the full pass including failures."""
        logger.info("Extracting %s...", self.kind.value)
        try:
            await await_element(document, self.ready_selector, self.timeout_ms)
        except ElementNotFound as e:
            logger.warning("%s page not ready: %s", self.kind.value, e)
            return ExtractionPass(kind=self.kind)
        return self.run(document)

    def run(self, document: LiveDocument) -> ExtractionPass:
        """Synchronous pass over the current document (no readiness wait)."""
        result = ExtractionPass(kind=self.kind)
        strategy = self.select_strategy(document)
        if strategy is None:
            logger.info("No known %s layout on page", self.kind.value)
            return result
        result.strategy = strategy.name

        records: list[BaseRecord] = []
        containers = strategy.containers(document)
        for container in containers:
            try:
                values = strategy.parse(container)
                if values is None:
                    result.skipped += 1
                    continue
                records.append(self.build_record(values, container, result))
            except Exception as e:
                failure = ParseFailure(strategy.name, container.index, e)
                result.failures.append(failure)
                logger.warning("Error parsing %s container: %s", self.kind.value, failure)

        result.records = self.collect(records)
        logger.info(
            "Extracted %d %s from %d containers using %s layout (%d failed, %d skipped)",
            len(result.records),
            self.kind.value,
            len(containers),
            strategy.name,
            len(result.failures),
            result.skipped,
        )
        return result

    def build_record(
        self,
        values: dict[str, Any],
        container: Container,
        extraction: ExtractionPass,
    ) -> BaseRecord:
        """Validate parsed values into the kind's model, synthesizing an id if needed."""
        if not values.get("id"):
            values["id"] = extraction.synthesize_id(self.id_prefix, container.index)
        return record_model_for(self.kind).model_validate(values)

    def collect(self, records: list[BaseRecord]) -> list[BaseRecord]:
        """Post-process the pass output. Default: keep everything in order."""
        return records