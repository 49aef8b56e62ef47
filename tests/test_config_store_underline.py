from __future__ import annotations

from pathlib import Path

from PySide6.QtGui import QColor

from config_engine.properties_file import read_properties
from config_engine.rules import CategoryInfo, RuleInfo
from config_engine.underline import BLUE, GRAMMAR_COLOR_LT, STYLE_COLOR_BLUE

STYLE = CategoryInfo(name="Style", id="STYLE")
GRAMMAR = CategoryInfo(name="Grammar", id="GRAMMAR")
RULES = [
    RuleInfo("STYLE_ON", STYLE),
    RuleInfo("STYLE_OFF", STYLE, default_off=True),
    RuleInfo("GRAMMAR_ON", GRAMMAR),
]


def _rgb(color: QColor) -> tuple[int, int, int]:
    return (color.red(), color.green(), color.blue())


def test_store_uses_rule_classification(make_store) -> None:
    store = make_store()
    store.settings.color_selection = 2
    store.init_style_categories(RULES)

    assert _rgb(store.underline_color("Style", "STYLE_ON")) == BLUE
    assert _rgb(store.underline_color("Style", "STYLE_OFF")) == STYLE_COLOR_BLUE
    assert _rgb(store.underline_color("Grammar", "GRAMMAR_ON")) == GRAMMAR_COLOR_LT


def test_rule_color_override_beats_category_override(make_store) -> None:
    store = make_store()
    store.init_style_categories(RULES)
    store.set_underline_color("Style", QColor(1, 2, 3))
    store.set_underline_rule_color("STYLE_ON", QColor(4, 5, 6))

    assert _rgb(store.underline_color("Style", "STYLE_ON")) == (4, 5, 6)
    assert _rgb(store.underline_color("Style", "STYLE_OFF")) == (1, 2, 3)

    store.reset_underline_rule_color("STYLE_ON")
    assert _rgb(store.underline_color("Style", "STYLE_ON")) == (1, 2, 3)

    store.reset_underline_color("Style")
    store.settings.color_selection = 2
    assert _rgb(store.underline_color("Style", "STYLE_ON")) == BLUE


def test_category_name_sets_roundtrip(make_store, config_path: Path) -> None:
    store = make_store()
    store.set_disabled_category_names({"Typography", "Style, Extra"})
    store.set_enabled_category_names({"Grammar"})
    store.save()

    props = read_properties(config_path)
    assert props["disabledCategories.en"] == "Style__comma__ Extra,Typography"
    assert props["enabledCategories.en"] == "Grammar"

    reloaded = make_store()
    reloaded.load()
    assert reloaded.settings.disabled_category_names == {"Typography", "Style, Extra"}
    assert reloaded.settings.enabled_category_names == {"Grammar"}
