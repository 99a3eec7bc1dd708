"""Recoverable error taxonomy for the extraction core."""

from typing import Optional


class ExtractorError(Exception):
    """Base class for all extraction-core errors. None of them are fatal."""


class ElementNotFound(ExtractorError):
    """A selector never appeared in the document before the wait timed out."""

    def __init__(self, selector: str, timeout_ms: Optional[int] = None):
        self.selector = selector
        self.timeout_ms = timeout_ms
        message = f"Element not found: {selector}"
        if timeout_ms is not None:
            message += f" (waited {timeout_ms}ms)"
        super().__init__(message)


class ParseFailure(ExtractorError):
    """One container could not be parsed; the pass skips it and continues."""

    def __init__(self, strategy: str, index: int, cause: Exception):
        self.strategy = strategy
        self.index = index
        self.cause = cause
        super().__init__(f"{strategy}: container {index} failed: {cause}")


class UnsupportedPage(ExtractorError):
    """The current URL is not a contacts, deals or tasks page."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Unsupported page: {url}")


class TransportFailure(ExtractorError):
    """A message round-trip failed, e.g. the receiving context is unavailable."""


class EmptyResult(ExtractorError):
    """Extraction succeeded structurally but produced zero records."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No {kind} found on page")
