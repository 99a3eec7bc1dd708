"""Wait for a selector to appear in a LiveDocument."""

import asyncio
import logging

from lxml.html import HtmlElement

from ac_extractor.dom.document import LiveDocument
from ac_extractor.errors import ElementNotFound

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000


async def await_element(
    document: LiveDocument,
    selector: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> HtmlElement:
    """
    Resolve with the first element matching selector.

    Returns immediately if a match already exists. Otherwise observes the
    document and resolves after the first mutation batch that produces a match.
    Raises ElementNotFound if nothing matches within timeout_ms. The observer
    is disconnected on every exit path.
    """
    existing = document.query_selector(selector)
    if existing is not None:
        return existing

    loop = asyncio.get_running_loop()
    found: asyncio.Future[HtmlElement] = loop.create_future()

    def on_mutation() -> None:
        if found.done():
            return
        match = document.query_selector(selector)
        if match is not None:
            found.set_result(match)

    disconnect = document.observe(on_mutation)
    try:
        return await asyncio.wait_for(found, timeout_ms / 1000)
    except asyncio.TimeoutError:
        logger.debug("Timed out after %dms waiting for %s", timeout_ms, selector)
        raise ElementNotFound(selector, timeout_ms) from None
    finally:
        disconnect()
