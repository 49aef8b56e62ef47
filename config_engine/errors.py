"""
Domain exceptions for the configuration engine.

Notes
-----
Core engine logic avoids raising generic exceptions. Expected failure modes map
to a domain exception with a clear meaning. Operating system I/O failures are
the exception to that rule: they propagate unchanged as ``OSError``.
"""

from __future__ import annotations


class ConfigEngineError(RuntimeError):
    """Base exception for all configuration engine failures."""


class ConfigFormatError(ConfigEngineError):
    """Raised when a stored value does not match its textual grammar."""


class UnknownLanguageError(ConfigEngineError):
    """Raised when a language code is not known to the language registry."""
