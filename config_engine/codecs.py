"""
Codecs for structured setting values.

Each structured value is stored as a single line of text. This module holds
the pure encode/decode pairs for those values. Nothing here touches the store
or the filesystem.

Grammars
--------
- Color map: ``KEY:#rrggbb, KEY2:#rrggbb``. An entry separator is a comma
  (plus optional whitespace) directly preceded by ``:#`` and six hex digits,
  so keys may themselves contain commas.
- Default colors: ``#rrggbb,#rrggbb,#rrggbb`` (exactly three).
- Underline types: ``KEY:10, KEY2:18``. An entry separator is a comma (plus
  optional whitespace) directly preceded by a digit.
- Rule values: ``RULE:<tuple>,RULE2:<tuple>``. The tuple text is owned by a
  :class:`~config_engine.rule_options.RuleOptionCodec`.
- Id lists: comma-joined; literal commas inside an element are stored as
  ``__comma__``.

Notes
-----
Splitting follows the Java ``String.split`` convention the files were first
written with: trailing empty entries are dropped, inner ones are kept.
Every malformed value raises :class:`ConfigFormatError`.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Mapping, Sequence, TypeVar

from PySide6.QtGui import QColor

from .errors import ConfigFormatError
from .issue_types import IssueType
from .rule_options import RuleOptionCodec, RuleValue

K = TypeVar("K")

LIST_DELIMITER = ","
COMMA_MARKER = "__comma__"
ENTRY_SEPARATOR = ", "
DEFAULT_COLOR_COUNT = 3
UNDERLINE_TYPE_MIN = -32768
UNDERLINE_TYPE_MAX = 32767

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")
_COLOR_DELIMITER_LOOKBEHIND = re.compile(r":#[0-9A-Fa-f]{6}")
_SHORT = re.compile(r"-?[0-9]+")


def color_to_hex(color: QColor) -> str:
    """Return ``#rrggbb`` in lowercase with any alpha channel dropped."""
    return f"#{color.red():02x}{color.green():02x}{color.blue():02x}"


def color_from_hex(token: str) -> QColor:
    """
    Parse a ``#RRGGBB`` token.

    Raises
    ------
    ConfigFormatError
        If the token is not exactly ``#`` followed by six hex digits.
    """
    if not _HEX_COLOR.fullmatch(token):
        raise ConfigFormatError(f"Invalid color, #RRGGBB expected: {token!r}")
    value = int(token[1:], 16)
    return QColor((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def _drop_trailing_empty(parts: list[str]) -> list[str]:
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def _split_on_comma(text: str, is_delimiter: Callable[[str, int], bool]) -> list[str]:
    """Split on commas accepted by ``is_delimiter``, skipping whitespace after each."""
    parts: list[str] = []
    start = 0
    idx = 0
    length = len(text)
    while idx < length:
        if text[idx] == "," and is_delimiter(text, idx):
            parts.append(text[start:idx])
            idx += 1
            while idx < length and text[idx].isspace():
                idx += 1
            start = idx
            continue
        idx += 1
    parts.append(text[start:])
    return _drop_trailing_empty(parts)


def _after_hex_color(text: str, idx: int) -> bool:
    return idx >= 8 and _COLOR_DELIMITER_LOOKBEHIND.fullmatch(text, idx - 8, idx) is not None


def _after_digit(text: str, idx: int) -> bool:
    return idx >= 1 and "0" <= text[idx - 1] <= "9"


def _split_color_entry(entry: str) -> list[str]:
    """Split on every colon that is directly followed by ``#`` and six hex digits."""
    parts: list[str] = []
    start = 0
    for idx, ch in enumerate(entry):
        if ch == ":" and _HEX_COLOR.match(entry, idx + 1):
            parts.append(entry[start:idx])
            start = idx + 1
    parts.append(entry[start:])
    return _drop_trailing_empty(parts)


def _decode_colors(text: str | None, make_key: Callable[[str], K]) -> dict[K, QColor]:
    result: dict[K, QColor] = {}
    if not text:
        return result
    for entry in _split_on_comma(text, _after_hex_color):
        key_and_color = _split_color_entry(entry)
        if len(key_and_color) != 2:
            raise ConfigFormatError(f"Could not parse key and color, colon expected: {entry!r}")
        key, hex_color = key_and_color
        result[make_key(key)] = color_from_hex(hex_color.rstrip())
    return result


def decode_color_map(text: str | None) -> dict[str, QColor]:
    """
    Decode a ``KEY:#rrggbb`` list.

    Parameters
    ----------
    text:
        Stored value, or None when the key is absent.

    Returns
    -------
    dict[str, QColor]
        Colors by key; empty for absent or empty input.

    Raises
    ------
    ConfigFormatError
        If an entry does not split into exactly one key and one color.
    """
    return _decode_colors(text, str)


def decode_issue_color_map(text: str | None) -> dict[IssueType, QColor]:
    """Decode a color list keyed by issue type names (see :func:`decode_color_map`)."""
    return _decode_colors(text, IssueType.parse)


def encode_color_map(colors: Mapping[str, QColor] | Mapping[IssueType, QColor]) -> str:
    """Encode colors as ``KEY:#rrggbb`` entries joined by ``", "``."""
    entries: list[str] = []
    for key, color in colors.items():
        name = key.value if isinstance(key, IssueType) else str(key)
        entries.append(f"{name}:{color_to_hex(color)}")
    return ENTRY_SEPARATOR.join(entries)


def decode_default_colors(text: str | None) -> list[QColor]:
    """
    Decode the base/style/hint default color triple.

    Returns
    -------
    list[QColor]
        Three colors, or an empty list for absent or empty input.

    Raises
    ------
    ConfigFormatError
        If the value does not hold exactly three ``#RRGGBB`` tokens.
    """
    if not text:
        return []
    tokens = _drop_trailing_empty(text.split(LIST_DELIMITER))
    if len(tokens) != DEFAULT_COLOR_COUNT:
        raise ConfigFormatError(
            f"Could not parse default colors, {DEFAULT_COLOR_COUNT} colors expected: {text!r}"
        )
    return [color_from_hex(token) for token in tokens]


def encode_default_colors(colors: Sequence[QColor]) -> str:
    """Encode colors as ``#rrggbb`` tokens joined by ``,``."""
    return LIST_DELIMITER.join(color_to_hex(c) for c in colors)


def decode_underline_types(text: str | None) -> dict[str, int]:
    """
    Decode a ``KEY:N`` list of underline style codes.

    Raises
    ------
    ConfigFormatError
        If an entry lacks exactly one colon or its value is not a 16-bit integer.
    """
    result: dict[str, int] = {}
    if not text:
        return result
    for entry in _split_on_comma(text, _after_digit):
        key_and_type = _drop_trailing_empty(entry.split(":"))
        if len(key_and_type) != 2:
            raise ConfigFormatError(f"Could not parse key and type, colon expected: {entry!r}")
        key, raw = key_and_type
        if not _SHORT.fullmatch(raw):
            raise ConfigFormatError(f"Invalid underline type: {raw!r}")
        value = int(raw)
        if not UNDERLINE_TYPE_MIN <= value <= UNDERLINE_TYPE_MAX:
            raise ConfigFormatError(f"Underline type out of range: {value}")
        result[key] = value
    return result


def encode_underline_types(types: Mapping[str, int]) -> str:
    """Encode underline types as ``KEY:N`` entries joined by ``", "``."""
    return ENTRY_SEPARATOR.join(f"{key}:{value}" for key, value in types.items())


def decode_rule_values(text: str | None, codec: RuleOptionCodec) -> dict[str, tuple[RuleValue, ...]]:
    """
    Decode a ``RULE:<tuple>`` list.

    Blank entries are skipped. Rule ids are trimmed.

    Raises
    ------
    ConfigFormatError
        If a non-blank entry does not split into exactly one id and one tuple.
    """
    result: dict[str, tuple[RuleValue, ...]] = {}
    if not text:
        return result
    for raw_entry in text.split(LIST_DELIMITER):
        entry = raw_entry.strip()
        if not entry:
            continue
        rule_and_value = _drop_trailing_empty(entry.split(":"))
        if len(rule_and_value) != 2:
            raise ConfigFormatError(f"Could not parse rule and value, colon expected: {entry!r}")
        rule_id, encoded = rule_and_value
        result[rule_id.strip()] = tuple(codec.decode(encoded))
    return result


def encode_rule_values(values: Mapping[str, Sequence[RuleValue]], codec: RuleOptionCodec) -> str:
    """Encode rule values as ``RULE:<tuple>`` joined by ``,``; empty tuples are skipped."""
    entries = [f"{rule_id}:{codec.encode(v)}" for rule_id, v in values.items() if v]
    return LIST_DELIMITER.join(entries)


def split_id_list(text: str | None) -> list[str]:
    """
    Split a comma-joined id list, restoring escaped commas.

    Returns
    -------
    list[str]
        Elements in stored order; empty for absent or empty input.
    """
    if not text:
        return []
    names = _drop_trailing_empty(text.split(LIST_DELIMITER))
    return [name.replace(COMMA_MARKER, LIST_DELIMITER) for name in names]


def join_id_list(values: Iterable[str]) -> str:
    """Join ids with ``,`` after escaping literal commas inside each id."""
    return LIST_DELIMITER.join(v.replace(LIST_DELIMITER, COMMA_MARKER) for v in values)
