"""Security and no-index headers attached to every response."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from types import MappingProxyType

_SECURITY_HEADERS: dict[str, str] = {
    "X-Robots-Tag": "noindex, nofollow, noarchive, nosnippet, noimageindex, nocache",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

_HEADER_SET: Mapping[str, str] = MappingProxyType(_SECURITY_HEADERS)


def security_headers() -> Mapping[str, str]:
    """Return the read-only header set."""
    return _HEADER_SET


def apply_security_headers(headers: MutableMapping[str, str]) -> None:
    """Merge the header set into a response's headers.

    Item assignment on Starlette's MutableHeaders replaces existing values,
    so each header ends up present exactly once.
    """
    for name, value in _HEADER_SET.items():
        headers[name] = value
