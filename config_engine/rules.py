"""
Rule and category metadata, and the classification derived from it.

The host application owns its rules. The engine only needs a small slice of
metadata per rule to decide default underline colors and which settings tabs a
category belongs to. That slice is modelled here as plain frozen dataclasses.

The classification is derived, never persisted. Rebuild it whenever the live
rule set changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .issue_types import IssueType

AI_GRAMMAR_OTHER_RULE_ID = "LO_AI_DETECTION_RULE_OTHER"
AI_STYLE_CATEGORY = "AI_STYLE_CATEGORY"
STYLE_CATEGORY_ID = "STYLE"

_STYLE_ISSUE_TYPES = frozenset({IssueType.STYLE.value.lower(), IssueType.REGISTER.value.lower()})


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """
    Category metadata.

    Attributes
    ----------
    name:
        Display name; used as key in underline overrides.
    id:
        Stable category id, for example ``STYLE`` or ``TYPOS``.
    default_off:
        True if the whole category is off unless enabled.
    tab_name:
        Name of a special settings tab holding this category, if any.
    """

    name: str
    id: str
    default_off: bool = False
    tab_name: str | None = None


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """
    Rule metadata.

    Attributes
    ----------
    id:
        Rule id.
    category:
        Category the rule belongs to.
    issue_type:
        Issue type name, compared case-insensitively.
    description:
        Human readable description.
    default_off:
        True if the rule is off by default.
    office_default_off:
        True if the rule is off by default inside an office suite.
    office_default_on:
        True if the rule is on by default inside an office suite even when
        `default_off` is set.
    """

    id: str
    category: CategoryInfo
    issue_type: str = IssueType.UNCATEGORIZED.value
    description: str = ""
    default_off: bool = False
    office_default_off: bool = False
    office_default_on: bool = False

    @property
    def is_default_on(self) -> bool:
        return not self.office_default_off and (not self.default_off or self.office_default_on)


@dataclass(frozen=True, slots=True)
class RuleClassification:
    """Style-like and optional sets plus the special-tab mapping."""

    style_like_categories: frozenset[str] = frozenset()
    optional_rules: frozenset[str] = frozenset()
    optional_categories: frozenset[str] = frozenset()
    special_tabs: dict[str, str] = field(default_factory=dict)

    def is_style_like(self, category: str) -> bool:
        return category in self.style_like_categories

    def is_optional_rule(self, rule_id: str) -> bool:
        return rule_id in self.optional_rules

    def is_optional_category(self, category: str) -> bool:
        return category in self.optional_categories

    def is_special_tab_category(self, category: str) -> bool:
        """Return True if the category is shown on a special tab."""
        return category in self.special_tabs

    def is_in_special_tab(self, category: str, tab_name: str) -> bool:
        """Return True if the category is shown on the named special tab."""
        return self.special_tabs.get(category) == tab_name

    def special_tab_names(self) -> list[str]:
        """Return every special tab name, sorted."""
        return sorted(set(self.special_tabs.values()))

    def special_tab_categories(self, tab_name: str) -> set[str]:
        """Return the categories shown on the named special tab."""
        return {category for category, tab in self.special_tabs.items() if tab == tab_name}


def classify_rules(rules: Iterable[RuleInfo]) -> RuleClassification:
    """
    Derive the classification from the live rule set.

    Parameters
    ----------
    rules:
        Every rule known to the host, in any order.

    Returns
    -------
    RuleClassification
        Frozen result.

    Notes
    -----
    - A category is style-like if any of its rules has issue type ``style`` or
      ``register``, or if its id is ``STYLE``.
    - A category is optional if none of its rules is on by default. A rule in
      a default-off category never counts as on by default.
    - The AI "other" rule and the AI style category are always optional.
    - The first tab name seen for a category wins.
    """
    style_like: set[str] = set()
    optional_rules: set[str] = set()
    category_default: dict[str, bool] = {}
    special_tabs: dict[str, str] = {}

    for rule in rules:
        category = rule.category
        if category.tab_name is not None and category.name not in special_tabs:
            special_tabs[category.name] = category.tab_name
        if rule.issue_type.lower() in _STYLE_ISSUE_TYPES or category.id == STYLE_CATEGORY_ID:
            style_like.add(category.name)
        is_default = rule.is_default_on
        if not is_default:
            optional_rules.add(rule.id)
        if category.default_off:
            is_default = False
        if category.name not in category_default or is_default:
            category_default[category.name] = is_default

    optional_categories = {name for name, is_default in category_default.items() if not is_default}
    optional_rules.add(AI_GRAMMAR_OTHER_RULE_ID)
    optional_categories.add(AI_STYLE_CATEGORY)

    return RuleClassification(
        style_like_categories=frozenset(style_like),
        optional_rules=frozenset(optional_rules),
        optional_categories=frozenset(optional_categories),
        special_tabs=special_tabs,
    )
