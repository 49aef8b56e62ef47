"""
Underline color and style resolution.

Resolution order for a match of a given category (and optionally rule):

1. Per-rule override.
2. Per-category override.
3. A computed default that depends on the color scheme (``colorSelection``),
   whether the rule or category is on by default, and whether the category is
   style-like.

Open-office hosts cannot render custom colors, so they always get blue.
"""

from __future__ import annotations

from PySide6.QtGui import QColor

from .rules import RuleClassification
from .settings import Settings

UNDERLINE_WAVE = 10
UNDERLINE_BOLDWAVE = 18
UNDERLINE_BOLD = 12
UNDERLINE_DASH = 5

SCHEME_WRITING_TOOL = 0
SCHEME_BLUE = 1
SCHEME_LANGUAGE_TOOL = 2
SCHEME_DARK = 3
SCHEME_CUSTOM = 99

BLUE = (0, 0, 255)
GRAMMAR_COLOR_LT = (255, 100, 0)
STYLE_COLOR_WT = (0, 100, 0)
HINT_COLOR_WT = (150, 150, 0)
STYLE_COLOR_BLUE = (70, 80, 255)
HINT_COLOR_BLUE = (150, 160, 255)
GRAMMAR_COLOR_DARK = (100, 150, 255)
STYLE_COLOR_DARK = (0, 140, 0)
HINT_COLOR_DARK = (100, 100, 0)

DEFAULT_UNDERLINE_COLORS = (BLUE, STYLE_COLOR_WT, HINT_COLOR_WT)


def _color(rgb: tuple[int, int, int]) -> QColor:
    return QColor(*rgb)


def default_colors(settings: Settings) -> list[QColor]:
    """
    Return the base/style/hint triple in effect.

    The configured triple is used only if it holds exactly three colors;
    otherwise the built-in triple is returned.
    """
    if len(settings.underline_default_colors) != 3:
        return [_color(rgb) for rgb in DEFAULT_UNDERLINE_COLORS]
    return [QColor(c) for c in settings.underline_default_colors]


def underline_color(
    settings: Settings,
    classification: RuleClassification,
    category: str,
    rule_id: str | None = None,
    *,
    is_open_office: bool = False,
) -> QColor:
    """
    Resolve the underline color for a match.

    Parameters
    ----------
    settings:
        Live settings holding overrides and the color scheme.
    classification:
        Style-like and optional sets derived from the rule metadata.
    category:
        Category name of the match.
    rule_id:
        Rule id of the match, if known. With a rule id the default-on check
        uses the rule; without one it uses the category.
    is_open_office:
        True when running inside an open-office host.

    Returns
    -------
    QColor
        A new color object; callers may modify it.
    """
    if is_open_office:
        return _color(BLUE)
    if rule_id is not None and rule_id in settings.underline_rule_colors:
        return QColor(settings.underline_rule_colors[rule_id])
    if category in settings.underline_colors:
        return QColor(settings.underline_colors[category])

    if rule_id is None:
        is_default = not classification.is_optional_category(category)
    else:
        is_default = not classification.is_optional_rule(rule_id)
    is_style = classification.is_style_like(category)
    scheme = settings.color_selection

    if scheme == SCHEME_LANGUAGE_TOOL:
        if not is_default:
            return _color(STYLE_COLOR_BLUE)
        return _color(BLUE) if is_style else _color(GRAMMAR_COLOR_LT)

    custom = settings.underline_default_colors
    if scheme == SCHEME_CUSTOM and len(custom) == 3:
        if not is_default:
            return QColor(custom[2])
        return QColor(custom[1]) if is_style else QColor(custom[0])

    if not is_default:
        if scheme == SCHEME_BLUE:
            return _color(HINT_COLOR_BLUE)
        return _color(HINT_COLOR_DARK) if scheme == SCHEME_DARK else _color(HINT_COLOR_WT)
    if is_style:
        if scheme == SCHEME_BLUE:
            return _color(STYLE_COLOR_BLUE)
        return _color(STYLE_COLOR_DARK) if scheme == SCHEME_DARK else _color(STYLE_COLOR_WT)
    return _color(GRAMMAR_COLOR_DARK) if scheme == SCHEME_DARK else _color(BLUE)


def underline_type(settings: Settings, category: str, rule_id: str | None = None) -> int:
    """Resolve the underline style code: rule override, category override, else wave."""
    if rule_id is not None and rule_id in settings.underline_rule_types:
        return settings.underline_rule_types[rule_id]
    return settings.underline_types.get(category, UNDERLINE_WAVE)
