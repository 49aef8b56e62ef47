from __future__ import annotations

from pathlib import Path

from config_engine.properties_file import read_properties


def test_other_language_settings_survive_a_save(make_store, registry, config_path: Path) -> None:
    config_path.write_text(
        "ltVersion=1.0\n"
        "disabledRules.en=E1\n"
        "disabledRules.de=G1\n"
        "configurableRuleValues.fr=R1:2\n",
        encoding="iso-8859-1",
    )
    store = make_store()
    store.load()
    assert store.settings.disabled_rule_ids == {"E1"}

    store.set_disabled_rule_ids({"E2"})
    store.save()

    props = read_properties(config_path)
    assert props["disabledRules.en"] == "E2"
    assert props["disabledRules.de"] == "G1"
    assert props["configurableRuleValues.fr"] == "R1:2"

    german = make_store(registry.require("de"))
    german.load()
    assert german.settings.disabled_rule_ids == {"G1"}


def test_inactive_profile_settings_survive_a_save(make_store, config_path: Path) -> None:
    config_path.write_text(
        "ltVersion=1.0\n"
        "definedProfiles=Work\n"
        "Work__colorSelection=2\n"
        "Work__disabledRules.de=G1\n"
        "Work__underlineTypes=Style:18, \n",
        encoding="iso-8859-1",
    )
    store = make_store()
    store.load()
    store.settings.theme_selection = 1
    store.save()

    props = read_properties(config_path)
    assert props["Work__colorSelection"] == "2"
    assert props["Work__disabledRules.de"] == "G1"
    assert props["Work__underlineTypes"] == "Style:18, "
    assert props["themeSelection"] == "1"


def test_fixed_language_selects_the_qualifier(make_store, config_path: Path) -> None:
    config_path.write_text(
        "ltVersion=1.0\n"
        "useDocumentLanguage=false\n"
        "fixedLanguage=de\n"
        "disabledRules.de=G1\n"
        "disabledRules.en=E1\n",
        encoding="iso-8859-1",
    )
    store = make_store()
    store.load()
    assert store.settings.disabled_rule_ids == {"G1"}
    assert store.default_language is not None
    assert store.default_language.code == "de"

    store.set_disabled_rule_ids({"G2"})
    store.save()

    props = read_properties(config_path)
    assert props["disabledRules.de"] == "G2"
    assert props["disabledRules.en"] == "E1"


def test_store_without_language_uses_unqualified_keys(make_store, config_path: Path) -> None:
    store = make_store(None)
    store.set_disabled_rule_ids({"R1"})
    store.save()

    props = read_properties(config_path)
    assert props["disabledRules"] == "R1"
