from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from config_engine.clock import FixedClock, header_timestamp
from config_engine.errors import ConfigFormatError
from config_engine.properties_file import (
    format_properties,
    parse_properties,
    read_properties,
    write_properties,
)

CLOCK = FixedClock(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))


def test_parse_properties_separators_and_comments() -> None:
    text = "# header\n! other\n\na=1\nb : 2\nc 3\n  d=4\n"
    assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4"}


def test_parse_properties_line_continuation() -> None:
    assert parse_properties("key=one \\\n    two\n") == {"key": "one two"}


def test_parse_properties_unicode_escape() -> None:
    assert parse_properties("k=caf\\u00e9\n") == {"k": "café"}


def test_parse_properties_rejects_truncated_unicode_escape() -> None:
    with pytest.raises(ConfigFormatError):
        parse_properties("k=\\u12\n")


def test_parse_properties_later_duplicate_wins() -> None:
    assert parse_properties("a=1\na=2\n") == {"a": "2"}


def test_format_properties_writes_comment_and_timestamp() -> None:
    text = format_properties({"a": "1"}, "hello", clock=CLOCK)
    assert text == "#hello\n#Tue Jan 02 03:04:05 UTC 2024\na=1\n"


def test_write_then_read_roundtrips_special_characters(tmp_path: Path) -> None:
    path = tmp_path / "cfg.properties"
    props = {
        "key with space": "a=b:c#d!e",
        "uni": "ü€😀",
        "lead": " x",
        "tabs": "a\tb\nc",
        "slash": "C:\\temp\\",
    }
    write_properties(path, props, comment="test", clock=CLOCK)

    assert path.read_bytes().isascii()
    assert read_properties(path) == props


def test_write_append_adds_a_second_pass(tmp_path: Path) -> None:
    path = tmp_path / "cfg.properties"
    write_properties(path, {"a": "1", "b": "1"}, comment="first", clock=CLOCK)
    write_properties(path, {"b": "2"}, comment="second", append=True, clock=CLOCK)

    text = path.read_text(encoding="iso-8859-1")
    assert text.count("#Tue Jan 02 03:04:05 UTC 2024") == 2
    assert read_properties(path) == {"a": "1", "b": "2"}


def test_read_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_properties(tmp_path / "missing.properties")


def test_header_timestamp_uses_properties_layout() -> None:
    assert header_timestamp(CLOCK) == "Tue Jan 02 03:04:05 UTC 2024"
    naive = FixedClock(datetime(2024, 1, 2, 3, 4, 5))
    assert header_timestamp(naive) == "Tue Jan 02 03:04:05 UTC 2024"
