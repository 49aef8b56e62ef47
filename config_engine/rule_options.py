"""
Typed-tuple codec for configurable rule parameters.

A configurable rule stores a short tuple of parameter values (for example a
minimum word count and a flag). The store treats the tuple encoding as an
opaque collaborator so hosts can plug in their own format.

Default format
--------------
Values are separated by ``;``. Each token decodes to the first type that
accepts it: ``bool`` (``true``/``false``), ``int``, ``float``, else ``str``.

The tuple text sits inside a ``RULE:<tuple>,RULE2:<tuple>`` list, so string
values have ``,``, ``:`` and ``;`` replaced by markers. A string that would
otherwise decode as another type (``"5"``, ``"true"``, ``""``) is prefixed
with ``__str__``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence

RuleValue = bool | int | float | str

VALUE_SEPARATOR = ";"
STRING_MARKER = "__str__"

# Applied in order on encode, in reverse on decode.
_ESCAPES = (
    (",", "__comma__"),
    (":", "__colon__"),
    (";", "__semicolon__"),
)

_INT = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|-?inf|nan")


class RuleOptionCodec(Protocol):
    """Converts a rule parameter tuple to and from its text form."""

    def decode(self, text: str) -> tuple[RuleValue, ...]:
        """Decode text into an ordered tuple of typed values."""
        raise NotImplementedError

    def encode(self, values: Sequence[RuleValue]) -> str:
        """
        Encode an ordered sequence of typed values as text.

        The result must not contain ``,`` or ``:``.
        """
        raise NotImplementedError


def _escape(text: str) -> str:
    for literal, marker in _ESCAPES:
        text = text.replace(literal, marker)
    return text


def _unescape(text: str) -> str:
    for literal, marker in reversed(_ESCAPES):
        text = text.replace(marker, literal)
    return text


def _infer(token: str) -> RuleValue:
    lowered = token.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT.fullmatch(token):
        return int(token)
    if _FLOAT.fullmatch(token):
        return float(token)
    return token


def _decode_token(token: str) -> RuleValue:
    if token.startswith(STRING_MARKER):
        return _unescape(token[len(STRING_MARKER):])
    value = _infer(token)
    return _unescape(value) if isinstance(value, str) else value


def _encode_value(value: RuleValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if not isinstance(value, str):
        return str(value)
    text = _escape(value)
    if not value or value.startswith(STRING_MARKER) or not isinstance(_infer(text), str):
        return STRING_MARKER + text
    return text


@dataclass(frozen=True, slots=True)
class SemicolonRuleOptionCodec(RuleOptionCodec):
    """Default codec: ``;``-separated tokens with type inference on decode."""

    def decode(self, text: str) -> tuple[RuleValue, ...]:
        if not text:
            return ()
        return tuple(_decode_token(token) for token in text.split(VALUE_SEPARATOR))

    def encode(self, values: Sequence[RuleValue]) -> str:
        return VALUE_SEPARATOR.join(_encode_value(v) for v in values)
