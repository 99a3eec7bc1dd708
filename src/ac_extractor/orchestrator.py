"""
Page-side orchestration of one extraction pass.

Idle -> Classifying -> Extracting -> Reporting -> Idle, with every failure
path returning to Idle. At most one pass runs per page context; a start
signal that arrives while a pass is running is ignored.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ac_extractor.detector import classify
from ac_extractor.dom.document import LiveDocument
from ac_extractor.errors import EmptyResult, TransportFailure, UnsupportedPage
from ac_extractor.extractors.registry import ExtractorRegistry
from ac_extractor.indicator import StatusIndicator
from ac_extractor.messaging.protocol import Message, MessageType, Response
from ac_extractor.messaging.router import MessageRouter
from ac_extractor.models.record import RecordKind
from ac_extractor.settings import ExtractorSettings

logger = logging.getLogger(__name__)


class ExtractionState(str, Enum):
    IDLE = "idle"
    CLASSIFYING = "classifying"
    EXTRACTING = "extracting"
    REPORTING = "reporting"


@dataclass
class ExtractionOutcome:
    """How a pass ended: success, unsupported, empty or failed."""

    status: str
    message: str
    kind: Optional[RecordKind] = None
    count: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "success"


class Orchestrator:
    """
    Drives classifier -> extractor -> store for one page context.

    The in-progress flag and the indicator belong to this instance; build one
    orchestrator per page context lifetime.
    """

    def __init__(
        self,
        document: LiveDocument,
        router: MessageRouter,
        indicator: Optional[StatusIndicator] = None,
        settings: Optional[ExtractorSettings] = None,
        registry: type[ExtractorRegistry] = ExtractorRegistry,
    ):
        self.document = document
        self.settings = settings or ExtractorSettings()
        self.indicator = indicator or StatusIndicator(
            success_duration_ms=self.settings.success_duration_ms,
            error_duration_ms=self.settings.error_duration_ms,
        )
        self._router = router
        self._registry = registry
        self._state = ExtractionState.IDLE
        self._in_progress = False
        self._task: Optional[asyncio.Task] = None
        self.passes_run = 0

    @property
    def state(self) -> ExtractionState:
        return self._state

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def current_task(self) -> Optional[asyncio.Task]:
        """Task of the most recently scheduled pass, if any."""
        return self._task

    def handle_message(self, message: Message) -> Response:
        """Page-side message listener."""
        if message.type is MessageType.START_EXTRACTION:
            self.start()
            return Response.ok()
        return Response.fail(f"Page context does not handle {message.type.value}")

    def start(self) -> Optional[asyncio.Task]:
        """Schedule a pass without waiting for it. No-op while one is running."""
        if not self._claim():
            return None
        self._task = asyncio.create_task(self._execute(), name="extraction-pass")
        self._task.add_done_callback(self._release_if_cancelled)
        return self._task

    async def run_extraction(self) -> Optional[ExtractionOutcome]:
        """
        Run one full pass. Returns its outcome, or None if another pass was
        already running. Never raises: every failure is reported through the
        indicator and the flag is always cleared.
        """
        if not self._claim():
            return None
        return await self._execute()

    def _claim(self) -> bool:
        # Set synchronously so a second start() in the same tick sees it.
        if self._in_progress:
            logger.info("Extraction already in progress")
            return False
        self._in_progress = True
        self._state = ExtractionState.CLASSIFYING
        return True

    def _release_if_cancelled(self, task: asyncio.Task) -> None:
        # A task cancelled before its first step never reaches _execute's finally.
        if task.cancelled():
            self._in_progress = False
            self._state = ExtractionState.IDLE

    async def _execute(self) -> ExtractionOutcome:
        try:
            outcome = await self._run_pass()
        except UnsupportedPage as e:
            logger.info("%s", e)
            outcome = ExtractionOutcome("unsupported", "Not on a supported ActiveCampaign page")
        except EmptyResult as e:
            logger.info("%s", e)
            outcome = ExtractionOutcome("empty", "No data found on this page", kind=RecordKind(e.kind))
        except TransportFailure as e:
            logger.error("Message error: %s", e)
            outcome = ExtractionOutcome("failed", "Failed to save data")
        except Exception as e:
            logger.exception("Extraction error")
            outcome = ExtractionOutcome("failed", f"Extraction failed: {e}")
        finally:
            self._in_progress = False
            self._state = ExtractionState.IDLE

        if outcome.ok:
            self.indicator.show_success(outcome.message)
        else:
            self.indicator.show_error(outcome.message)
        return outcome

    async def _run_pass(self) -> ExtractionOutcome:
        self._state = ExtractionState.CLASSIFYING
        kind = classify(self.document.url)
        if kind is None:
            raise UnsupportedPage(self.document.url)

        self._state = ExtractionState.EXTRACTING
        self.passes_run += 1
        self.indicator.show(f"Extracting {kind.value}...")
        extractor = self._registry.get(kind, timeout_ms=self.settings.ready_timeout_ms)
        records = await extractor.extract(self.document)

        if not records:
            raise EmptyResult(kind.value)

        self._state = ExtractionState.REPORTING
        response = await self._router.send(Message.extract_data(kind, records))
        if not response.success:
            logger.error("Store rejected %s: %s", kind.value, response.error)
            return ExtractionOutcome("failed", "Failed to save data", kind=kind)
        return ExtractionOutcome("success", f"Extracted {len(records)} {kind.value}", kind=kind, count=len(records))


def attach_page(
    router: MessageRouter,
    tab_id: int,
    document: LiveDocument,
    indicator: Optional[StatusIndicator] = None,
    settings: Optional[ExtractorSettings] = None,
) -> Orchestrator:
    """Create the orchestrator for a page context and register it with the router."""
    orchestrator = Orchestrator(document, router, indicator=indicator, settings=settings)
    router.register_page(tab_id, orchestrator.handle_message)
    kind = classify(document.url)
    if kind is not None:
        logger.info("Extractor ready on %s page (tab %s)", kind.value, tab_id)
    return orchestrator
