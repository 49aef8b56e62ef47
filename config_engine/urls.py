"""Syntactic checks for server URLs stored in the configuration."""

from __future__ import annotations

import re

_HTTP_URL = re.compile(r"https?://.+(:\d+)?.*")


def is_valid_server_url(url: str) -> bool:
    """
    Return True if `url` can be used as a check-server base URL.

    The URL must start with ``http://`` or ``https://`` and must not end with
    ``/`` or ``/v2``; the client appends the API path itself.
    """
    if url.endswith("/") or url.endswith("/v2"):
        return False
    return _HTTP_URL.fullmatch(url) is not None


def is_valid_ai_server_url(url: str) -> bool:
    """Return True if `url` starts with ``http://`` or ``https://`` and has a host part."""
    return _HTTP_URL.fullmatch(url) is not None
