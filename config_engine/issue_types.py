"""Issue types used as keys of the error color map."""

from __future__ import annotations

from enum import Enum

from .errors import ConfigFormatError


class IssueType(str, Enum):
    """Localization quality issue types (ITS 2.0 vocabulary)."""

    TERMINOLOGY = "terminology"
    MISTRANSLATION = "mistranslation"
    OMISSION = "omission"
    UNTRANSLATED = "untranslated"
    ADDITION = "addition"
    DUPLICATION = "duplication"
    INCONSISTENCY = "inconsistency"
    GRAMMAR = "grammar"
    LEGAL = "legal"
    REGISTER = "register"
    LOCALE_SPECIFIC_CONTENT = "localeSpecificContent"
    LOCALE_VIOLATION = "localeViolation"
    STYLE = "style"
    CHARACTERS = "characters"
    MISSPELLING = "misspelling"
    TYPOGRAPHICAL = "typographical"
    FORMATTING = "formatting"
    INCONSISTENT_ENTITIES = "inconsistentEntities"
    NUMBERS = "numbers"
    MARKUP = "markup"
    PATTERN_PROBLEM = "patternProblem"
    WHITESPACE = "whitespace"
    INTERNATIONALIZATION = "internationalization"
    LENGTH = "length"
    NON_CONFORMANCE = "nonConformance"
    UNCATEGORIZED = "uncategorized"
    OTHER = "other"

    @classmethod
    def parse(cls, name: str) -> "IssueType":
        """
        Resolve an issue type by its stored name.

        Matching is case-insensitive, so both ``grammar`` and ``GRAMMAR`` work.

        Raises
        ------
        ConfigFormatError
            If the name is not a known issue type.
        """
        wanted = name.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise ConfigFormatError(f"Unknown issue type: {name!r}")
