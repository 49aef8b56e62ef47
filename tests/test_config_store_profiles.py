from __future__ import annotations

from pathlib import Path

from config_engine.properties_file import read_properties
from config_engine.store import profile_prefix


def test_profile_prefix_replaces_blanks() -> None:
    assert profile_prefix("") == ""
    assert profile_prefix(None) == ""
    assert profile_prefix("My Work\tProfile") == "My_Work_Profile__"


def test_work_profile_is_isolated_from_default(make_store, config_path: Path) -> None:
    store = make_store()
    store.set_disabled_rule_ids({"D1"})
    store.settings.color_selection = 1
    store.add_profile("Work")
    store.save()

    store.load("Work")
    assert store.current_profile == "Work"
    assert store.settings.disabled_rule_ids == set()
    store.set_disabled_rule_ids({"W1"})
    store.save()

    props = read_properties(config_path)
    assert props["currentProfile"] == "Work"
    assert props["disabledRules.en"] == "D1"
    assert props["Work__disabledRules.en"] == "W1"
    assert props["colorSelection"] == "1"

    work = make_store()
    work.load("Work")
    assert work.settings.disabled_rule_ids == {"W1"}
    assert work.settings.color_selection == 0

    default = make_store()
    default.load("")
    assert default.settings.disabled_rule_ids == {"D1"}
    assert default.settings.color_selection == 1


def test_load_without_argument_follows_stored_current_profile(make_store) -> None:
    store = make_store()
    store.add_profile("Work")
    store.save()
    store.load("Work")
    store.set_disabled_rule_ids({"W1"})
    store.save()

    reloaded = make_store()
    reloaded.load()
    assert reloaded.current_profile == "Work"
    assert reloaded.settings.disabled_rule_ids == {"W1"}


def test_removed_profile_is_dropped_on_save(make_store, config_path: Path) -> None:
    store = make_store()
    store.set_profiles(["Work", "Home"])
    store.save()
    store.load("Work")
    store.set_disabled_rule_ids({"W1"})
    store.save()

    store.load("")
    assert store.defined_profiles == ["Work", "Home"]
    store.remove_profile("Work")
    store.save()

    props = read_properties(config_path)
    assert props["definedProfiles"] == "Home"
    assert not any(key.startswith("Work__") for key in props)


def test_add_profile_ignores_duplicates(make_store) -> None:
    store = make_store()
    store.add_profile("Work")
    store.add_profile("Work")
    assert store.defined_profiles == ["Work"]


def test_profile_names_with_commas_roundtrip(make_store) -> None:
    store = make_store()
    store.set_profiles(["Work, Team"])
    store.save()

    reloaded = make_store()
    reloaded.load()
    assert reloaded.defined_profiles == ["Work, Team"]


def test_removing_a_profile_keeps_profiles_sharing_its_prefix(make_store, config_path: Path) -> None:
    config_path.write_text(
        "ltVersion=1.0\n"
        "definedProfiles=Work,Work  Home\n"
        "Work__colorSelection=1\n"
        "Work__Home__colorSelection=3\n",
        encoding="iso-8859-1",
    )
    store = make_store()
    store.load("")
    store.remove_profile("Work")
    store.save()

    props = read_properties(config_path)
    assert "Work__colorSelection" not in props
    assert props["Work__Home__colorSelection"] == "3"

    home = make_store()
    home.load("Work  Home")
    assert home.settings.color_selection == 3
