"""Detect which kind of page the current URL points at."""

from typing import Optional, Sequence
from urllib.parse import urlparse

from ac_extractor.models.record import RecordKind

PageKind = RecordKind

# Checked in order; first kind with a matching fragment wins.
PAGE_PATTERNS: tuple[tuple[RecordKind, tuple[str, ...]], ...] = (
    (RecordKind.CONTACTS, ("/contacts", "/contact/")),
    (RecordKind.DEALS, ("/deals", "/deal/")),
    (RecordKind.TASKS, ("/tasks", "/task/")),
)


def classify(url: str) -> Optional[PageKind]:
    """
    Map a page URL to the record kind it lists, or None if unsupported.
    Pure substring matching on the full URL string.
    """
    for kind, fragments in PAGE_PATTERNS:
        if any(fragment in url for fragment in fragments):
            return kind
    return None


def is_supported_host(url: str, hosts: Sequence[str]) -> bool:
    """True if the URL's host is one of the configured target hosts or a subdomain of one."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return False
    if not hostname:
        return False
    for host in hosts:
        host = host.lower().lstrip(".")
        if hostname == host or hostname.endswith("." + host):
            return True
    return False
