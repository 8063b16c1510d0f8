"""Paths that bypass authentication on protected deployments."""

from __future__ import annotations

from collections.abc import Iterable

# Framework assets, API routes, crawler files and the login surface
PUBLIC_PREFIXES: tuple[str, ...] = (
    "/_next/",
    "/api/",
    "/favicon.ico",
    "/robots.txt",
    "/sitemap.xml",
    "/login",
)


def is_exempt(path: str, extra_prefixes: Iterable[str] = ()) -> bool:
    """Return True if path needs no credentials.

    Any path containing a dot is treated as a static file.
    """
    if path.startswith(PUBLIC_PREFIXES):
        return True
    if "." in path:
        return True
    return any(path.startswith(prefix) for prefix in extra_prefixes)
