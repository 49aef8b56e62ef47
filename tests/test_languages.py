from __future__ import annotations

import pytest

from config_engine.errors import UnknownLanguageError
from config_engine.languages import Language, StaticLanguageRegistry, default_registry


def test_language_code_joins_parts_with_underscore() -> None:
    language = Language.from_code("ca-ES-valencia")
    assert (language.short_code, language.country, language.variant) == ("ca", "ES", "valencia")
    assert language.code == "ca_ES_valencia"


def test_registry_resolves_normalized_codes() -> None:
    registry = default_registry()
    resolved = registry.resolve("en-US")
    assert resolved is not None
    assert resolved.code == "en_US"


def test_registry_does_not_fall_back_to_short_code() -> None:
    registry = StaticLanguageRegistry.from_codes(["de_DE"])
    assert registry.resolve("de") is None


def test_registry_require_raises_for_unknown_code() -> None:
    with pytest.raises(UnknownLanguageError):
        default_registry().require("qq_QQ")


def test_registry_all_keeps_declared_order() -> None:
    registry = StaticLanguageRegistry.from_codes(["fr", "de", "en"])
    assert [language.code for language in registry.all()] == ["fr", "de", "en"]
