"""Live HTML document backed by lxml, with observer-based mutation batches."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional

import lxml.html
from cssselect import HTMLTranslator
from lxml import etree
from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

MutationCallback = Callable[[], None]

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"

_translator = HTMLTranslator()


@lru_cache(maxsize=512)
def _compile(css: str, prefix: str) -> etree.XPath:
    return etree.XPath(_translator.css_to_xpath(css, prefix=prefix))


def select_all(element: HtmlElement, css: str) -> list[HtmlElement]:
    """Descendants of element matching css (the element itself never matches)."""
    return _compile(css, "descendant::")(element)


def select_one(element: HtmlElement, css: str) -> Optional[HtmlElement]:
    """First descendant of element matching css, or None."""
    matches = select_all(element, css)
    return matches[0] if matches else None


def element_text(element: HtmlElement) -> str:
    """Visible text of an element with whitespace runs collapsed and trimmed."""
    return " ".join(element.text_content().split())


class LiveDocument:
    """
    The rendered page an extraction runs against.

    Holds the current lxml tree and the page URL. Every mutating call
    (replace, append_html, mutate) is one mutation batch: observers are
    notified once, after the batch has been applied.
    """

    def __init__(self, html: str = "", url: str = ""):
        self.url = url
        self._root = self._parse(html)
        self._observers: list[MutationCallback] = []

    @staticmethod
    def _parse(html: str) -> HtmlElement:
        return lxml.html.document_fromstring(html.strip() or _EMPTY_DOCUMENT)

    @classmethod
    def from_file(cls, path: str | Path, url: str = "") -> LiveDocument:
        """Load a saved page snapshot."""
        return cls(Path(path).read_text(encoding="utf-8"), url=url)

    @property
    def root(self) -> HtmlElement:
        return self._root

    @property
    def body(self) -> HtmlElement:
        return self._root.body

    def query_selector(self, selector: str) -> Optional[HtmlElement]:
        """First element matching a CSS selector, or None."""
        matches = self.query_selector_all(selector)
        return matches[0] if matches else None

    def query_selector_all(self, selector: str) -> list[HtmlElement]:
        """All elements matching a CSS selector, in document order."""
        return _compile(selector, "descendant-or-self::")(self._root)

    # Mutation observation

    def observe(self, callback: MutationCallback) -> Callable[[], None]:
        """Subscribe to mutation batches. Returns a disconnect function (idempotent)."""
        self._observers.append(callback)

        def disconnect() -> None:
            try:
                self._observers.remove(callback)
            except ValueError:
                pass

        return disconnect

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _notify(self) -> None:
        # Copy: observers disconnect themselves while being notified.
        for callback in list(self._observers):
            callback()

    # Mutations

    def replace(self, html: str) -> None:
        """Swap in a whole new document (e.g. after client-side navigation)."""
        self._root = self._parse(html)
        self._notify()

    def append_html(self, parent_selector: str, fragment: str) -> None:
        """Append parsed fragment elements under the first match of parent_selector."""
        parent = self.query_selector(parent_selector)
        if parent is None:
            raise ValueError(f"No element matches {parent_selector!r}")
        for element in lxml.html.fragments_fromstring(fragment):
            if isinstance(element, str):
                # Leading text before the first element.
                parent.text = (parent.text or "") + element
            else:
                parent.append(element)
        self._notify()

    def mutate(self, fn: Callable[[HtmlElement], None]) -> None:
        """Apply an arbitrary in-place change to the tree as one batch."""
        fn(self._root)
        self._notify()
