"""
Language registry contract.

The engine does not own language metadata. It needs two things from the host
application: resolving a stored code to a language object, and enumerating all
known languages so settings stored for other languages can be carried through
a save untouched.

Notes
-----
Codes have the form ``short[_COUNTRY[_variant]]``, for example ``en``,
``en_US`` or ``ca_ES_valencia``. Hyphenated input (``en-US``) is accepted and
normalized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from .errors import UnknownLanguageError

NO_LANGUAGE_CODE = "xx"


@dataclass(frozen=True, slots=True)
class Language:
    """
    A natural language known to the host application.

    Attributes
    ----------
    short_code:
        ISO language code, for example ``de``.
    country:
        Optional country code, for example ``DE``.
    variant:
        Optional variant name, for example ``valencia``.
    name:
        Human-friendly display name.
    """

    short_code: str
    country: str = ""
    variant: str = ""
    name: str = ""

    @property
    def code(self) -> str:
        """Short code with country and variant, joined by ``_``."""
        return "_".join(part for part in (self.short_code, self.country, self.variant) if part)

    @classmethod
    def from_code(cls, code: str, name: str = "") -> "Language":
        """Build a language from a ``short_COUNTRY_variant`` code."""
        parts = normalize_code(code).split("_", 2)
        short = parts[0]
        country = parts[1] if len(parts) > 1 else ""
        variant = parts[2] if len(parts) > 2 else ""
        return cls(short_code=short, country=country, variant=variant, name=name or short)


class LanguageRegistry(Protocol):
    """Resolves language codes and enumerates known languages."""

    def resolve(self, code: str) -> Language | None:
        """
        Return the language for a code, or None if it is unknown.

        Parameters
        ----------
        code:
            Stored language code.
        """
        raise NotImplementedError

    def all(self) -> Sequence[Language]:
        """Return every known language in a stable order."""
        raise NotImplementedError


def normalize_code(code: str) -> str:
    """Return a code with ``-`` separators replaced by ``_``."""
    return code.strip().replace("-", "_")


@dataclass(frozen=True, slots=True)
class StaticLanguageRegistry(LanguageRegistry):
    """
    Registry over a fixed list of languages.

    Lookup is by exact code after normalization; ``de-DE`` and ``de_DE`` are
    the same language, ``de`` is a different one.
    """

    languages: tuple[Language, ...]

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> "StaticLanguageRegistry":
        return cls(languages=tuple(Language.from_code(code) for code in codes))

    def resolve(self, code: str) -> Language | None:
        wanted = normalize_code(code)
        if not wanted:
            return None
        for language in self.languages:
            if language.code == wanted:
                return language
        return None

    def require(self, code: str) -> Language:
        """
        Return the language for a code.

        Raises
        ------
        UnknownLanguageError
            If the code is not known.
        """
        language = self.resolve(code)
        if language is None:
            raise UnknownLanguageError(f"Unknown language code: {code!r}")
        return language

    def all(self) -> Sequence[Language]:
        return self.languages


DEFAULT_LANGUAGE_CODES: tuple[str, ...] = (
    "ar",
    "ast_ES",
    "be_BY",
    "br_FR",
    "ca_ES",
    "ca_ES_valencia",
    "da_DK",
    "de",
    "de_AT",
    "de_CH",
    "de_DE",
    "el_GR",
    "en",
    "en_AU",
    "en_CA",
    "en_GB",
    "en_NZ",
    "en_US",
    "en_ZA",
    "eo",
    "es",
    "fa",
    "fr",
    "ga_IE",
    "gl_ES",
    "it",
    "ja_JP",
    "km_KH",
    "nl",
    "nl_BE",
    "pl_PL",
    "pt",
    "pt_AO",
    "pt_BR",
    "pt_MZ",
    "pt_PT",
    "ro_RO",
    "ru_RU",
    "sk_SK",
    "sl_SI",
    "sv",
    "ta_IN",
    "tl_PH",
    "uk_UA",
    "zh_CN",
)


def default_registry() -> StaticLanguageRegistry:
    """Return a registry with the languages shipped by default."""
    return StaticLanguageRegistry.from_codes(DEFAULT_LANGUAGE_CODES)
