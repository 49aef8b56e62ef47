from __future__ import annotations

import pytest
from PySide6.QtGui import QColor

from config_engine.codecs import (
    decode_color_map,
    decode_issue_color_map,
    encode_color_map,
)
from config_engine.errors import ConfigFormatError
from config_engine.issue_types import IssueType


def test_decode_color_map_splits_entries_after_hex_color() -> None:
    colors = decode_color_map("CAT1:#aabbcc, CAT2:#112233")
    assert colors == {"CAT1": QColor(0xAA, 0xBB, 0xCC), "CAT2": QColor(0x11, 0x22, 0x33)}


def test_decode_color_map_keeps_commas_inside_keys() -> None:
    colors = decode_color_map("Punctuation, Commas:#AABBCC,Typos:#000000")
    assert list(colors) == ["Punctuation, Commas", "Typos"]
    assert colors["Punctuation, Commas"] == QColor(0xAA, 0xBB, 0xCC)


def test_decode_color_map_accepts_trailing_separator() -> None:
    assert decode_color_map("CAT1:#aabbcc, ") == {"CAT1": QColor(0xAA, 0xBB, 0xCC)}


@pytest.mark.parametrize("text", [None, ""])
def test_decode_color_map_empty_input_is_empty_map(text: str | None) -> None:
    assert decode_color_map(text) == {}


@pytest.mark.parametrize("text", ["CAT1", "CAT1:blue", "CAT1:#abc", "A:#aabbcc:#112233"])
def test_decode_color_map_rejects_malformed_entries(text: str) -> None:
    with pytest.raises(ConfigFormatError):
        decode_color_map(text)


def test_encode_color_map_uses_lowercase_hex_and_drops_alpha() -> None:
    text = encode_color_map({"CAT1": QColor(0xAA, 0xBB, 0xCC), "CAT2": QColor(1, 2, 3, 4)})
    assert text == "CAT1:#aabbcc, CAT2:#010203"


def test_color_map_roundtrip() -> None:
    colors = {"Grammar": QColor(255, 100, 0), "Style": QColor(0, 100, 0), "Hints": QColor(150, 150, 0)}
    assert decode_color_map(encode_color_map(colors)) == colors


def test_issue_color_map_resolves_names_case_insensitively() -> None:
    colors = decode_issue_color_map("GRAMMAR:#ff6400, style:#006400")
    assert colors == {IssueType.GRAMMAR: QColor(255, 100, 0), IssueType.STYLE: QColor(0, 100, 0)}


def test_issue_color_map_encodes_stored_names() -> None:
    assert encode_color_map({IssueType.LOCALE_VIOLATION: QColor(0, 0, 255)}) == "localeViolation:#0000ff"


def test_issue_color_map_rejects_unknown_issue_type() -> None:
    with pytest.raises(ConfigFormatError):
        decode_issue_color_map("NOT_A_TYPE:#000000")
