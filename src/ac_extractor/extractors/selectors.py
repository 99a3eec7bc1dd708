"""
Field descriptors for the selector cascade.

Each descriptor is a pure function of one element: it returns a value or None.
A FieldSpec tries its descriptors in order and keeps the first non-empty value.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from lxml.html import HtmlElement

from ac_extractor.dom.document import element_text, select_all, select_one

Selector = Callable[[HtmlElement], Any]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = " ".join(value.split())
    return value or None


def is_present(value: Any) -> bool:
    """Empty strings, empty lists and None count as missing."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    return True


@dataclass(frozen=True)
class Text:
    """Text (or an attribute) of the first descendant matching css."""

    css: str
    attribute: Optional[str] = None

    def __call__(self, element: HtmlElement) -> Optional[str]:
        match = select_one(element, self.css)
        if match is None:
            return None
        if self.attribute:
            return _clean(match.get(self.attribute))
        return _clean(element_text(match))


@dataclass(frozen=True)
class Attr:
    """Attribute of the container itself, optionally with a prefix removed."""

    name: str
    strip_prefix: str = ""

    def __call__(self, element: HtmlElement) -> Optional[str]:
        value = _clean(element.get(self.name))
        if value and self.strip_prefix and value.startswith(self.strip_prefix):
            value = value[len(self.strip_prefix):]
        return value or None


@dataclass(frozen=True)
class Cell:
    """Text of the nth table cell in a row (structural fallback)."""

    index: int

    def __call__(self, element: HtmlElement) -> Optional[str]:
        cells = select_all(element, "td")
        if self.index >= len(cells):
            return None
        return _clean(element_text(cells[self.index]))


@dataclass(frozen=True)
class HrefTail:
    """Last path segment of the first link's href, e.g. '/app/deals/42' -> '42'."""

    css: str = "a"

    def __call__(self, element: HtmlElement) -> Optional[str]:
        link = select_one(element, self.css)
        if link is None:
            return None
        href = (link.get("href") or "").split("#")[0].split("?")[0]
        return _clean(href.rstrip("/").split("/")[-1])


@dataclass(frozen=True)
class HasClass:
    """True when the container carries a class; None otherwise."""

    name: str

    def __call__(self, element: HtmlElement) -> Optional[bool]:
        return True if self.name in (element.get("class") or "").split() else None


@dataclass(frozen=True)
class TextList:
    """Texts of every descendant matching css, skipping blanks and long runs."""

    css: str
    max_length: int = 50

    def __call__(self, element: HtmlElement) -> Optional[list[str]]:
        values = []
        for match in select_all(element, self.css):
            text = _clean(element_text(match))
            if text and len(text) < self.max_length:
                values.append(text)
        return values or None


@dataclass(frozen=True)
class Keyword:
    """
    Classify a container by keywords found in the text of css, then in the
    class names of icon_css. Returns the first matching label.
    """

    css: str
    keywords: tuple[tuple[str, tuple[str, ...]], ...]
    icon_css: Optional[str] = None

    def _match(self, haystack: str) -> Optional[str]:
        haystack = haystack.lower()
        for label, needles in self.keywords:
            if any(needle in haystack for needle in needles):
                return label
        return None

    def __call__(self, element: HtmlElement) -> Optional[str]:
        match = select_one(element, self.css)
        if match is not None:
            found = self._match(element_text(match))
            if found:
                return found
        if self.icon_css:
            icon = select_one(element, self.icon_css)
            if icon is not None:
                return self._match(icon.get("class") or "")
        return None


@dataclass(frozen=True)
class FieldSpec:
    """
    One output field: ordered candidate selectors plus a default.

    scope="group" reads from the enclosing group element (e.g. the kanban
    column a card sits in) instead of the container.
    """

    name: str
    candidates: tuple[Selector, ...]
    default: Any = None
    ignore: tuple[str, ...] = ()
    scope: str = "item"

    def resolve(self, element: Optional[HtmlElement]) -> Any:
        if element is not None:
            for candidate in self.candidates:
                value = candidate(element)
                if is_present(value) and value not in self.ignore:
                    return value
        return list(self.default) if isinstance(self.default, list) else self.default


def field_specs(*specs: FieldSpec) -> tuple[FieldSpec, ...]:
    """Validate a field list has unique names."""
    names = [spec.name for spec in specs]
    duplicates = {n for n in names if names.count(n) > 1}
    if duplicates:
        raise ValueError(f"Duplicate field names: {sorted(duplicates)}")
    return specs


def css(*selectors: str) -> tuple[Selector, ...]:
    """Shorthand: one Text descriptor per css selector."""
    return tuple(Text(s) for s in selectors)
