from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config_engine.errors import ConfigFormatError
from config_engine.properties_file import read_properties
from config_engine.store import StoreOptions


def _write(path: Path, text: str) -> None:
    path.write_text(text, encoding="iso-8859-1")


@pytest.mark.parametrize(
    "text",
    [
        "serverPort=abc\n",
        "errorColors=GRAMMAR\n",
        "underlineDefaultColors=#000000,#111111\n",
        "underlineTypes=Style:wave\n",
        "configurableRuleValues.en=R1\n",
        "noDefaultCheck=true\nnumberParagraphs=many\n",
    ],
)
def test_malformed_values_abort_the_load(make_store, config_path: Path, text: str) -> None:
    _write(config_path, text)
    with pytest.raises(ConfigFormatError):
        make_store().load()


def test_malformed_font_values_keep_defaults(make_store, config_path: Path) -> None:
    _write(config_path, "font.style=bold\nfont.size=big\nfont.name=Serif\n")
    store = make_store()
    store.load()
    assert store.settings.font_style == -1
    assert store.settings.font_size == -1
    assert store.settings.font_name == "Serif"


def test_invalid_server_url_is_dropped(make_store, config_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(config_path, "useOtherServer=true\notherServerUrl=http://localhost:8081/\n")
    store = make_store()
    with caplog.at_level(logging.WARNING, logger="config_engine.store"):
        store.load()
    assert store.settings.other_server_url is None
    assert store.server_url is None
    assert "invalid server URL" in caplog.text


def test_invalid_server_url_is_not_saved(make_store, config_path: Path) -> None:
    store = make_store()
    store.settings.other_server_url = "https://example.org/v2"
    store.save()
    assert "otherServerUrl" not in read_properties(config_path)


def test_unknown_language_code_is_left_unset(make_store, config_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write(config_path, "language=qq_QQ\n")
    store = make_store()
    with caplog.at_level(logging.WARNING, logger="config_engine.store"):
        store.load()
    assert store.settings.language is None
    assert "qq_QQ" in caplog.text


def test_legacy_file_reads_mother_tongue(make_store, config_path: Path) -> None:
    _write(config_path, "motherTongue=de\n")
    store = make_store()
    store.load()
    assert store.settings.lt_version is None
    assert store.settings.mother_tongue is not None
    assert store.settings.mother_tongue.code == "de"
    assert store.settings.fixed_language is None


def test_legacy_file_in_office_reads_fixed_language(make_store, config_path: Path) -> None:
    _write(config_path, "definedProfiles=Work\nmotherTongue=fr\nWork__motherTongue=de\n")
    store = make_store(options=StoreOptions(is_office=True))
    store.load()
    assert store.settings.mother_tongue is None
    assert store.settings.fixed_language is not None
    assert store.settings.fixed_language.code == "fr"

    store.save()
    props = read_properties(config_path)
    assert props["fixedLanguage"] == "fr"
    assert props["Work__fixedLanguage"] == "de"
    assert props["ltVersion"] == "1.0"


def test_mother_tongue_placeholder_means_unset(make_store, config_path: Path) -> None:
    _write(config_path, "ltVersion=1.0\nmotherTongue=xx\n")
    store = make_store()
    store.load()
    assert store.settings.mother_tongue is None
