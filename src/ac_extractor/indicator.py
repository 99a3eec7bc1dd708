"""Short-lived status signals for an extraction pass."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class StatusEvent:
    """One signal shown to the user."""

    level: str  # "info" | "success" | "error"
    message: str
    shown_at: float = field(default_factory=time.monotonic)
    duration_ms: Optional[int] = None  # None = until replaced or removed

    def expired(self, now: Optional[float] = None) -> bool:
        if self.duration_ms is None:
            return False
        now = time.monotonic() if now is None else now
        return (now - self.shown_at) * 1000 >= self.duration_ms


class StatusIndicator:
    """
    Receives show/success/error signals from one page context.
    Only one status is visible at a time; each new signal replaces the last.
    Rendering is left to the listener (if any); every signal is logged.
    """

    def __init__(
        self,
        success_duration_ms: int = 3000,
        error_duration_ms: int = 5000,
        listener: Optional[Callable[[StatusEvent], None]] = None,
    ):
        self.success_duration_ms = success_duration_ms
        self.error_duration_ms = error_duration_ms
        self._listener = listener
        self._current: Optional[StatusEvent] = None
        self.history: list[StatusEvent] = []

    def show(self, message: str, level: str = "info", duration_ms: Optional[int] = None) -> StatusEvent:
        event = StatusEvent(level=level, message=message, duration_ms=duration_ms)
        self._current = event
        self.history.append(event)
        log = logger.warning if level == "error" else logger.info
        log("[%s] %s", level, message)
        if self._listener is not None:
            try:
                self._listener(event)
            except Exception:
                logger.exception("Status listener failed for %r", message)
        return event

    def show_success(self, message: str, duration_ms: Optional[int] = None) -> StatusEvent:
        return self.show(message, "success", duration_ms or self.success_duration_ms)

    def show_error(self, message: str, duration_ms: Optional[int] = None) -> StatusEvent:
        return self.show(message, "error", duration_ms or self.error_duration_ms)

    def remove(self) -> None:
        self._current = None

    @property
    def current(self) -> Optional[StatusEvent]:
        """The visible status, or None once it has expired or been removed."""
        if self._current is not None and self._current.expired():
            self._current = None
        return self._current

    @property
    def last(self) -> Optional[StatusEvent]:
        return self.history[-1] if self.history else None
