"""
Properties file I/O.

The configuration file is a flat ``key=value`` text file in the format read and
written by Java's ``java.util.Properties`` class, so files remain exchangeable
with other tools that already use it.

Format
------
- ``#`` or ``!`` starts a comment line; blank lines are ignored.
- The key ends at the first unescaped ``=``, ``:`` or whitespace.
- A line ending in an odd number of backslashes continues on the next line.
- Escapes: ``\\t``, ``\\n``, ``\\r``, ``\\f``, ``\\uXXXX``; any other escaped
  character stands for itself.
- Files are ISO-8859-1; characters outside printable ASCII are written as
  ``\\uXXXX`` escapes.

Notes
-----
Parsing keeps file order. A key defined twice keeps its last value, matching
the Java reader.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .clock import Clock, header_timestamp
from .errors import ConfigFormatError

FILE_ENCODING = "iso-8859-1"

_WHITESPACE = " \t\f"
_KEY_TERMINATORS = "=: \t\f"
_ESCAPE_OUT = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_ESCAPE_IN = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SPECIAL = "=:#!"


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse properties text into an ordered mapping.

    Parameters
    ----------
    text:
        Full file content.

    Returns
    -------
    dict[str, str]
        Keys and unescaped values in file order.

    Raises
    ------
    ConfigFormatError
        If a ``\\u`` escape is malformed.
    """
    result: dict[str, str] = {}
    for logical in _logical_lines(text):
        key, value = _split_key_value(logical)
        result[_unescape(key)] = _unescape(value)
    return result


def read_properties(path: Path) -> dict[str, str]:
    """
    Read a properties file.

    Parameters
    ----------
    path:
        File to read.

    Returns
    -------
    dict[str, str]
        Parsed key/value table in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist. Callers decide whether that is an error.
    ConfigFormatError
        If an escape sequence is malformed.
    """
    raw = path.read_bytes()
    return parse_properties(raw.decode(FILE_ENCODING))


def format_properties(props: Mapping[str, str], comment: str | None, clock: Clock | None = None) -> str:
    """
    Render a mapping as properties text.

    Parameters
    ----------
    props:
        Keys and values to write, in the order given.
    comment:
        Optional header comment (may span several lines).
    clock:
        Time source for the timestamp comment.

    Returns
    -------
    str
        Text ending with a newline.
    """
    lines: list[str] = []
    if comment is not None:
        for part in comment.splitlines() or [""]:
            lines.append("#" + _escape(part, is_key=False, escape_specials=False))
    lines.append("#" + header_timestamp(clock))
    for key, value in props.items():
        lines.append(_escape(key, is_key=True) + "=" + _escape(value, is_key=False))
    return "\n".join(lines) + "\n"


def write_properties(
    path: Path,
    props: Mapping[str, str],
    *,
    comment: str | None = None,
    append: bool = False,
    clock: Clock | None = None,
) -> None:
    """
    Write one properties pass to disk.

    Parameters
    ----------
    path:
        Target file.
    props:
        Keys and values to write.
    comment:
        Header comment for this pass.
    append:
        Append to an existing file instead of truncating it.
    clock:
        Time source for the timestamp comment.

    Raises
    ------
    OSError
        Propagated unchanged when the file cannot be written.
    """
    text = format_properties(props, comment, clock=clock)
    mode = "a" if append else "w"
    with path.open(mode, encoding=FILE_ENCODING, newline="\n") as handle:
        handle.write(text)


def _logical_lines(text: str) -> list[str]:
    natural = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    out: list[str] = []
    pending: str | None = None
    for line in natural:
        stripped = line.lstrip(_WHITESPACE)
        if pending is None:
            if not stripped or stripped[0] in "#!":
                continue
            current = stripped
        else:
            current = pending + stripped
            pending = None
        if _ends_with_continuation(current):
            pending = current[:-1]
            continue
        out.append(current)
    if pending is not None:
        out.append(pending)
    return out


def _ends_with_continuation(line: str) -> bool:
    count = 0
    for ch in reversed(line):
        if ch != "\\":
            break
        count += 1
    return count % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    idx = 0
    length = len(line)
    while idx < length:
        ch = line[idx]
        if ch == "\\":
            idx += 2
            continue
        if ch in _KEY_TERMINATORS:
            break
        idx += 1
    key = line[:idx]
    rest_idx = idx
    while rest_idx < length and line[rest_idx] in _WHITESPACE:
        rest_idx += 1
    if rest_idx < length and line[rest_idx] in "=:":
        rest_idx += 1
        while rest_idx < length and line[rest_idx] in _WHITESPACE:
            rest_idx += 1
    return key, line[rest_idx:]


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    out: list[str] = []
    idx = 0
    length = len(text)
    while idx < length:
        ch = text[idx]
        if ch != "\\":
            out.append(ch)
            idx += 1
            continue
        idx += 1
        if idx >= length:
            break
        esc = text[idx]
        if esc == "u":
            digits = text[idx + 1 : idx + 5]
            if len(digits) != 4:
                raise ConfigFormatError(f"Malformed \\uXXXX escape in: {text!r}")
            try:
                out.append(chr(int(digits, 16)))
            except ValueError as exc:
                raise ConfigFormatError(f"Malformed \\uXXXX escape in: {text!r}") from exc
            idx += 5
            continue
        out.append(_ESCAPE_IN.get(esc, esc))
        idx += 1
    result = "".join(out)
    if any("\ud800" <= ch <= "\udfff" for ch in result):
        result = result.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return result


def _escape(text: str, *, is_key: bool, escape_specials: bool = True) -> str:
    out: list[str] = []
    for pos, ch in enumerate(text):
        if ch == " ":
            out.append("\\ " if (is_key or pos == 0) and escape_specials else " ")
        elif ch == "\\" and escape_specials:
            out.append("\\\\")
        elif ch in _ESCAPE_OUT:
            out.append(_ESCAPE_OUT[ch])
        elif ch in _SPECIAL and escape_specials:
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append(_unicode_escape(ch))
        else:
            out.append(ch)
    return "".join(out)


def _unicode_escape(ch: str) -> str:
    code = ord(ch)
    if code > 0xFFFF:
        # Encode as a UTF-16 surrogate pair, like the Java writer.
        code -= 0x10000
        high = 0xD800 + (code >> 10)
        low = 0xDC00 + (code & 0x3FF)
        return f"\\u{high:04X}\\u{low:04X}"
    return f"\\u{code:04X}"
