"""
Time source for configuration file headers.

Every pass written to a configuration file starts with a timestamp comment in
the layout ``java.util.Properties`` uses (``Tue Jan 02 03:04:05 UTC 2024``).
Writers take an optional Clock so tests can assert on exact file contents.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

HEADER_TIME_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


class Clock(Protocol):
    """A source of time for header comments."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


@dataclass(frozen=True, slots=True)
class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Always the same instant. A naive `fixed_time` is taken as UTC."""

    fixed_time: datetime

    def now(self) -> datetime:
        if self.fixed_time.tzinfo is None:
            return self.fixed_time.replace(tzinfo=timezone.utc)
        return self.fixed_time


def header_timestamp(clock: Clock | None = None) -> str:
    """
    Render the timestamp line of a file header, without the leading ``#``.

    Parameters
    ----------
    clock:
        Time source. Defaults to `SystemClock`.

    Returns
    -------
    str
        For example ``Tue Jan 02 03:04:05 UTC 2024``.
    """
    return (clock or SystemClock()).now().strftime(HEADER_TIME_FORMAT)
