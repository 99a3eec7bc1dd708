"""
Message router between page contexts and the store-owning context.

The store context is a single asyncio task draining a FIFO queue, so dataset
reads and writes are serialized. Page contexts register a handler under a tab
id; messages addressed to a tab are delivered to that handler directly.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from ac_extractor.errors import TransportFailure
from ac_extractor.messaging.protocol import Message, MessageType, Response
from ac_extractor.store.reconciliation import ReconciliationStore

logger = logging.getLogger(__name__)

PageHandler = Callable[[Message], Union[Response, Awaitable[Response]]]
Injector = Callable[[int], Union[None, Awaitable[None]]]

_STOP = object()


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


class MessageRouter:
    """Routes requests to the store context or to a specific page, one reply per request."""

    def __init__(self, store: ReconciliationStore):
        self._store = store
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None
        self._pages: dict[int, PageHandler] = {}

    @property
    def store(self) -> ReconciliationStore:
        return self._store

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    # Store context lifecycle

    async def start(self) -> None:
        """Start the store context. Initializes the dataset on first run."""
        if self.running:
            return
        self._store.initialize()
        self._queue = asyncio.Queue()
        self._worker = asyncio.create_task(self._serve(), name="store-context")
        logger.debug("Store context started")

    async def stop(self) -> None:
        """Drain pending requests and stop the store context."""
        if not self.running:
            return
        await self._queue.put(_STOP)
        await self._worker
        self._worker = None
        self._queue = None
        logger.debug("Store context stopped")

    async def __aenter__(self) -> "MessageRouter":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()

    async def _serve(self) -> None:
        while True:
            item = await self._queue.get()
            if item is _STOP:
                return
            message, reply = item
            response = await self._dispatch(message)
            if not reply.done():
                reply.set_result(response)

    async def _dispatch(self, message: Message) -> Response:
        logger.debug("Message received: %s", message.type.value)
        try:
            if message.type is MessageType.EXTRACT_DATA:
                if message.kind is None:
                    raise ValueError("EXTRACT_DATA requires a record kind")
                return Response.ok(self._store.upsert_many(message.kind, message.records))
            if message.type is MessageType.GET_DATA:
                return Response.ok(self._store.get())
            if message.type is MessageType.DELETE_RECORD:
                if message.kind is None or message.id is None:
                    raise ValueError("DELETE_RECORD requires a record kind and id")
                return Response.ok(self._store.delete_one(message.kind, message.id))
            if message.type is MessageType.TRIGGER_EXTRACT:
                if message.tab_id is None:
                    raise ValueError("TRIGGER_EXTRACT requires a tab id")
                reply = await self.send_to_page(message.tab_id, Message.start_extraction())
                return Response(success=reply.success, error=reply.error)
            raise ValueError(f"Unhandled message type for store context: {message.type.value}")
        except Exception as e:
            logger.warning("Message %s failed: %s", message.type.value, e)
            return Response.fail(str(e))

    # Sending

    async def send(self, message: Message) -> Response:
        """Send a request to the store context and wait for its reply."""
        if not self.running:
            raise TransportFailure("Store context is not running")
        reply: asyncio.Future = asyncio.get_running_loop().create_future()
        await self._queue.put((message, reply))
        return await reply

    def register_page(self, tab_id: int, handler: PageHandler) -> None:
        """Attach a page context's message listener under a tab id."""
        self._pages[tab_id] = handler

    def unregister_page(self, tab_id: int) -> None:
        self._pages.pop(tab_id, None)

    def has_page(self, tab_id: int) -> bool:
        return tab_id in self._pages

    async def send_to_page(self, tab_id: int, message: Message) -> Response:
        """Deliver a message to one page context."""
        handler = self._pages.get(tab_id)
        if handler is None:
            raise TransportFailure(f"Could not establish connection to tab {tab_id}: receiving end does not exist")
        try:
            return await _maybe_await(handler(message))
        except Exception as e:
            raise TransportFailure(f"Tab {tab_id} failed to handle {message.type.value}: {e}") from e

    async def request_extraction(
        self,
        tab_id: int,
        injector: Optional[Injector] = None,
        retry_delay_ms: int = 500,
    ) -> Response:
        """
        Ask a page to start extracting. If the page has no listener, inject the
        page logic once via injector and retry exactly once after a settle delay.
        """
        try:
            return await self.send_to_page(tab_id, Message.start_extraction())
        except TransportFailure as e:
            if injector is None:
                raise
            logger.info("Tab %s not reachable (%s); injecting page logic and retrying", tab_id, e)
        await _maybe_await(injector(tab_id))
        await asyncio.sleep(retry_delay_ms / 1000)
        try:
            return await self.send_to_page(tab_id, Message.start_extraction())
        except TransportFailure as e:
            raise TransportFailure(
                "Failed to connect. Please refresh the page and try again."
            ) from e
