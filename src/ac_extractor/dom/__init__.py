"""In-process page document with mutation observers, and selector waiting."""

from ac_extractor.dom.document import LiveDocument, element_text, select_all, select_one
from ac_extractor.dom.wait import DEFAULT_TIMEOUT_MS, await_element

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "LiveDocument",
    "await_element",
    "element_text",
    "select_all",
    "select_one",
]
