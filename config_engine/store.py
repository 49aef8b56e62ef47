"""
Profile-aware, language-qualified configuration store.

The store owns the live settings of the active profile and maps them to and
from a flat properties file.

Key layout
----------
``[profilePrefix]baseKey[.languageQualifier]``

- ``profilePrefix`` is empty for the default profile, else the profile name
  with blanks replaced by ``_`` followed by ``__``.
- ``languageQualifier`` is a language code; only rule enable/disable sets and
  configurable rule values carry it.

Passthrough
-----------
Settings of inactive profiles and of other languages are kept as raw text and
written back unchanged on save, so switching profile or language never loses
data.

File layout
-----------
A save writes one metadata pass (truncating the file) and then appends one
pass per profile, default profile first. Each pass has its own header.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from PySide6.QtGui import QColor

from . import underline
from .clock import Clock
from .codecs import (
    decode_color_map,
    decode_default_colors,
    decode_issue_color_map,
    decode_rule_values,
    decode_underline_types,
    encode_color_map,
    encode_default_colors,
    encode_rule_values,
    encode_underline_types,
    join_id_list,
    split_id_list,
)
from .errors import ConfigFormatError
from .languages import NO_LANGUAGE_CODE, Language, LanguageRegistry, default_registry
from .properties_file import read_properties, write_properties
from .rule_options import RuleOptionCodec, RuleValue, SemicolonRuleOptionCodec
from .rules import RuleClassification, RuleInfo, classify_rules
from .settings import (
    CURRENT_PROFILE_KEY,
    DEFINED_PROFILES_KEY,
    LANGUAGE_QUALIFIED_KEYS,
    LOG_LEVEL_KEY,
    LT_VERSION_KEY,
    MOTHER_TONGUE_KEY,
    NO_DEFAULT_CHECK_KEY,
    PROFILE_KEYS,
    PROFILE_ONLY_KEYS,
    SettingKey,
    Settings,
    ValueKind,
    default_of,
)
from .urls import is_valid_server_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

APP_NAME = "wtconfig"
VERSION_TAG = "1.0"
PROFILE_DELIMITER = "__"
DEFAULT_PROFILE_LABEL = "Default"
OPEN_OFFICE_MARKER = "ooo"

_BLANK = re.compile(r"[ \t]")
_BLANK_REPLACEMENT = "_"

# Handled before the generic loop: they decide the language qualifier.
_QUALIFIER_ATTRS = frozenset({"use_document_language", "fixed_language"})


class _Unset:
    """Marker for a stored value that decodes to "keep the current value"."""


_KEEP = _Unset()


def profile_prefix(profile: str | None) -> str:
    """
    Return the key prefix for a profile.

    Parameters
    ----------
    profile:
        Profile name; empty or None means the default profile.

    Returns
    -------
    str
        ``""`` for the default profile, else the sanitized name plus ``__``.
    """
    if not profile:
        return ""
    return _BLANK.sub(_BLANK_REPLACEMENT, profile) + PROFILE_DELIMITER


def language_qualifier(language: Language | None) -> str:
    """Return ``"." + code`` for a language, or ``""`` when there is none."""
    if language is None:
        return ""
    return "." + language.code


def _parse_bool(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() == "true"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class StoreOptions:
    """
    Host facts that do not change during a session.

    Attributes
    ----------
    is_office:
        True when running inside an office suite. Affects how legacy files
        without a version tag are read.
    is_open_office:
        True for open-office hosts, which only support blue underlines and
        single-paragraph checking.
    """

    is_office: bool = False
    is_open_office: bool = False


class ConfigStore:
    """
    Owns live settings and reads/writes them with profile and language scoping.

    Parameters
    ----------
    config_path:
        Properties file backing the store. It need not exist.
    language:
        Language of the current document; decides which language-qualified
        keys are live.
    registry:
        Known languages. Used to resolve stored codes and to enumerate the
        keys of other languages for passthrough.
    tuple_codec:
        Codec for configurable rule values.
    options:
        Host facts; see `StoreOptions`.
    clock:
        Time source for file header timestamps.

    Notes
    -----
    The store is not thread-safe. A save performs several sequential writes
    and must not interleave with a load of the same file.
    """

    def __init__(
        self,
        config_path: Path,
        language: Language | None = None,
        *,
        registry: LanguageRegistry | None = None,
        tuple_codec: RuleOptionCodec | None = None,
        options: StoreOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config_path = Path(config_path)
        self.language = language
        self.registry = registry or default_registry()
        self.tuple_codec = tuple_codec or SemicolonRuleOptionCodec()
        self.options = options or StoreOptions()
        self.clock = clock
        self.settings = Settings.defaults()
        self.classification = RuleClassification()
        self._other_profiles: dict[str, str] = {}
        self._other_languages: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self, profile: str | None = None) -> None:
        """
        Replace the live settings with those stored in the file.

        Parameters
        ----------
        profile:
            Profile to activate. None keeps the profile named by the stored
            ``currentProfile`` key, or the default profile if there is none.

        Raises
        ------
        ConfigFormatError
            If a stored value is malformed. The live settings are left
            partially loaded in that case.
        OSError
            If the file exists but cannot be read.

        Notes
        -----
        A missing file is not an error: the store is left at its defaults.
        """
        self.settings.reset()
        self._other_profiles = {}
        self._other_languages = {}
        s = self.settings
        if profile is not None:
            s.current_profile = profile

        try:
            props = read_properties(self.config_path)
        except FileNotFoundError:
            logger.info("No configuration file at %s, using defaults", self.config_path)
            return

        if profile is None:
            stored = props.get(CURRENT_PROFILE_KEY)
            if stored is not None:
                s.current_profile = stored
        for name in split_id_list(props.get(DEFINED_PROFILES_KEY)):
            if name not in s.defined_profiles:
                s.defined_profiles.append(name)

        s.lt_version = props.get(LT_VERSION_KEY)
        if s.lt_version is not None:
            raw = props.get(MOTHER_TONGUE_KEY)
            if raw is not None and raw != NO_LANGUAGE_CODE:
                s.mother_tongue = self._resolve_language(raw, MOTHER_TONGUE_KEY)
        s.log_level = props.get(LOG_LEVEL_KEY)

        self._store_other_profiles(props)
        self._apply_profile(props, profile_prefix(s.current_profile))
        logger.debug(
            "Loaded %s (profile=%r, %d passthrough keys)",
            self.config_path,
            s.current_profile,
            len(self._other_profiles) + len(self._other_languages),
        )

    def _apply_profile(self, props: dict[str, str], prefix: str) -> None:
        """Decode every setting stored under `prefix` over the live settings."""
        s = self.settings
        raw = props.get(prefix + "useDocumentLanguage")
        if raw is not None:
            s.use_document_language = _parse_bool(raw)

        if s.lt_version is None:
            raw = props.get(prefix + MOTHER_TONGUE_KEY)
            if raw is not None and raw != NO_LANGUAGE_CODE:
                legacy = self._resolve_language(raw, prefix + MOTHER_TONGUE_KEY)
                if self.options.is_office:
                    s.fixed_language = legacy
                else:
                    s.mother_tongue = legacy
        else:
            raw = props.get(prefix + "fixedLanguage")
            if raw is not None:
                s.fixed_language = self._resolve_language(raw, prefix + "fixedLanguage")

        qualifier = self._effective_qualifier(self.language)
        for spec in PROFILE_KEYS:
            if spec.attr in _QUALIFIER_ATTRS:
                continue
            key = prefix + spec.key + (qualifier if spec.qualified else "")
            raw = props.get(key)
            if raw is None and spec.kind is ValueKind.RULE_VALUES:
                raw = props.get(prefix + spec.key)
            if spec.kind is ValueKind.PARA_COUNT and not _parse_bool(props.get(prefix + NO_DEFAULT_CHECK_KEY)):
                continue
            if raw is None:
                continue
            value = self._decode(spec, raw, key)
            if value is not _KEEP:
                setattr(s, spec.attr, value)

        self._store_other_languages(props, prefix, qualifier)

    def _decode(self, spec: SettingKey, raw: str, key: str) -> Any:
        kind = spec.kind
        if kind is ValueKind.BOOL:
            return _parse_bool(raw)
        if kind in (ValueKind.INT, ValueKind.PARA_COUNT):
            try:
                return int(raw)
            except ValueError as exc:
                raise ConfigFormatError(f"Invalid integer for {key}: {raw!r}") from exc
        if kind is ValueKind.LENIENT_INT:
            try:
                return int(raw)
            except ValueError:
                logger.debug("Ignoring malformed integer for %s: %r", key, raw)
                return _KEEP
        if kind is ValueKind.STR:
            return raw
        if kind is ValueKind.PATH:
            return Path(raw)
        if kind is ValueKind.LANGUAGE:
            language = self._resolve_language(raw, key)
            return _KEEP if language is None else language
        if kind is ValueKind.SERVER_URL:
            if is_valid_server_url(raw):
                return raw
            logger.warning("Dropping invalid server URL for %s: %r", key, raw)
            return None
        if kind is ValueKind.ID_SET:
            return set(split_id_list(raw))
        if kind is ValueKind.COLOR_MAP:
            return decode_color_map(raw)
        if kind is ValueKind.ISSUE_COLOR_MAP:
            return decode_issue_color_map(raw)
        if kind is ValueKind.DEFAULT_COLORS:
            return decode_default_colors(raw)
        if kind is ValueKind.TYPE_MAP:
            return decode_underline_types(raw)
        if kind is ValueKind.RULE_VALUES:
            return decode_rule_values(raw, self.tuple_codec)
        raise AssertionError(f"Unhandled value kind: {kind}")

    def _resolve_language(self, code: str, key: str) -> Language | None:
        language = self.registry.resolve(code)
        if language is None:
            logger.warning("Unknown language code for %s: %r", key, code)
        return language

    def _store_other_profiles(self, props: dict[str, str]) -> None:
        legacy_office = self.options.is_office and self.settings.lt_version is None
        for name in self._profile_names():
            prefix = profile_prefix(name)
            if legacy_office and prefix + MOTHER_TONGUE_KEY in props:
                self._other_profiles[prefix + "fixedLanguage"] = props[prefix + MOTHER_TONGUE_KEY]
            for key in self._profile_vocabulary(prefix):
                if key in props:
                    self._other_profiles[key] = props[key]

    def _store_other_languages(self, props: dict[str, str], prefix: str, qualifier: str) -> None:
        self._other_languages = {}
        for language in self.registry.all():
            suffix = language_qualifier(language)
            if suffix == qualifier:
                continue
            for base in LANGUAGE_QUALIFIED_KEYS:
                key = prefix + base + suffix
                if key in props:
                    self._other_languages[key] = props[key]

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, language: Language | None = None) -> None:
        """
        Write the live settings and all passthrough data to the file.

        Parameters
        ----------
        language:
            Language whose qualified keys receive the live rule settings.
            Defaults to the store language.

        Raises
        ------
        OSError
            Propagated unchanged if any pass cannot be written. Earlier
            passes stay on disk.
        """
        s = self.settings
        qualifier = self._effective_qualifier(language or self.language)

        meta: dict[str, str] = {LT_VERSION_KEY: VERSION_TAG}
        if s.current_profile:
            meta[CURRENT_PROFILE_KEY] = s.current_profile
        if s.defined_profiles:
            meta[DEFINED_PROFILES_KEY] = join_id_list(s.defined_profiles)
        if s.mother_tongue is not None:
            meta[MOTHER_TONGUE_KEY] = s.mother_tongue.code
        if s.log_level is not None:
            meta[LOG_LEVEL_KEY] = s.log_level

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        write_properties(self.config_path, meta, comment=self._file_comment(), clock=self.clock)

        current_prefix = profile_prefix(s.current_profile)
        for name in self._profile_names():
            prefix = profile_prefix(name)
            if prefix == current_prefix:
                props = dict(self._other_languages)
                props.update(self._encode_profile(prefix, qualifier))
            else:
                props = {
                    key: self._other_profiles[key]
                    for key in self._profile_vocabulary(prefix)
                    if key in self._other_profiles
                }
            write_properties(
                self.config_path,
                props,
                comment=f"Profile: {name or DEFAULT_PROFILE_LABEL}",
                append=True,
                clock=self.clock,
            )
        logger.info("Saved configuration to %s (profile=%r)", self.config_path, s.current_profile)

    def encoded_settings(self) -> dict[str, str]:
        """Return the live settings as they would be written for the current profile."""
        return self._encode_profile(
            profile_prefix(self.settings.current_profile),
            self._effective_qualifier(self.language),
        )

    def _encode_profile(self, prefix: str, qualifier: str) -> dict[str, str]:
        """Encode the live settings under `prefix`, omitting defaults."""
        s = self.settings
        props: dict[str, str] = {}
        for spec in PROFILE_KEYS:
            value = getattr(s, spec.attr)
            if spec.kind is ValueKind.PARA_COUNT:
                if value != default_of(spec.attr):
                    props[prefix + NO_DEFAULT_CHECK_KEY] = _format_bool(True)
                    props[prefix + spec.key] = str(value)
                continue
            if not spec.always and value == default_of(spec.attr):
                continue
            text = self._encode(spec, value, prefix + spec.key)
            if text is None:
                continue
            props[prefix + spec.key + (qualifier if spec.qualified else "")] = text
        return props

    def _encode(self, spec: SettingKey, value: Any, key: str) -> str | None:
        kind = spec.kind
        if value is None:
            return None
        if kind is ValueKind.BOOL:
            return _format_bool(value)
        if kind in (ValueKind.INT, ValueKind.LENIENT_INT):
            return str(value)
        if kind is ValueKind.STR:
            return value
        if kind is ValueKind.PATH:
            return str(Path(value).absolute())
        if kind is ValueKind.LANGUAGE:
            return value.code
        if kind is ValueKind.SERVER_URL:
            if is_valid_server_url(value):
                return value
            logger.warning("Not saving invalid server URL for %s: %r", key, value)
            return None
        if kind is ValueKind.ID_SET:
            return join_id_list(sorted(value)) if value else None
        if kind in (ValueKind.COLOR_MAP, ValueKind.ISSUE_COLOR_MAP):
            return encode_color_map(value) if value else None
        if kind is ValueKind.DEFAULT_COLORS:
            return encode_default_colors(value) if value else None
        if kind is ValueKind.TYPE_MAP:
            return encode_underline_types(value) if value else None
        if kind is ValueKind.RULE_VALUES:
            return encode_rule_values(value, self.tuple_codec) or None
        raise AssertionError(f"Unhandled value kind: {kind}")

    def _file_comment(self) -> str:
        return f"{APP_NAME} configuration ({VERSION_TAG})"

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_profile(self, path: Path) -> bool:
        """
        Load the profile stored in another file over the live settings.

        The file names its profile with ``currentProfile``. That profile
        becomes current and is added to the defined profiles. Keys present in
        the file replace live values; absent keys leave them alone.

        Returns
        -------
        bool
            True if a profile was imported; False if the file is missing or
            names no profile.

        Raises
        ------
        ConfigFormatError
            If a stored value is malformed.
        """
        try:
            props = read_properties(Path(path))
        except FileNotFoundError:
            logger.warning("Import file not found: %s", path)
            return False
        name = props.get(CURRENT_PROFILE_KEY)
        if not name:
            logger.info("Import file %s names no profile; nothing imported", path)
            return False

        s = self.settings
        s.current_profile = name
        if name not in s.defined_profiles:
            s.defined_profiles.append(name)
        self._apply_profile(props, profile_prefix(name))
        logger.info("Imported profile %r from %s", name, path)
        return True

    def export_profile(self, profile: str, path: Path) -> None:
        """
        Write the live settings to a standalone file under a profile name.

        Parameters
        ----------
        profile:
            Name to store the settings under; need not be the active profile.
        path:
            Target file; overwritten.

        Raises
        ------
        OSError
            Propagated unchanged if the file cannot be written.
        """
        target = Path(path)
        meta: dict[str, str] = {}
        if profile:
            meta[CURRENT_PROFILE_KEY] = profile
        target.parent.mkdir(parents=True, exist_ok=True)
        write_properties(target, meta, comment=self._file_comment(), clock=self.clock)
        props = self._encode_profile(profile_prefix(profile), self._effective_qualifier(self.language))
        write_properties(
            target,
            props,
            comment=f"Profile: {profile or DEFAULT_PROFILE_LABEL}",
            append=True,
            clock=self.clock,
        )
        logger.info("Exported profile %r to %s", profile, target)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    @property
    def current_profile(self) -> str:
        return self.settings.current_profile

    @current_profile.setter
    def current_profile(self, name: str | None) -> None:
        self.settings.current_profile = name or ""

    @property
    def defined_profiles(self) -> list[str]:
        return list(self.settings.defined_profiles)

    def add_profile(self, name: str) -> None:
        """Add a profile name; adding an existing name is a no-op."""
        if name and name not in self.settings.defined_profiles:
            self.settings.defined_profiles.append(name)

    def remove_profile(self, name: str) -> None:
        """Forget a profile; its stored settings are dropped on the next save."""
        if name in self.settings.defined_profiles:
            self.settings.defined_profiles.remove(name)
        prefix = profile_prefix(name)
        if prefix:
            for key in self._profile_vocabulary(prefix):
                self._other_profiles.pop(key, None)

    def set_profiles(self, names: list[str]) -> None:
        """Replace the list of defined profiles."""
        self.settings.defined_profiles = []
        for name in names:
            self.add_profile(name)

    def _profile_names(self) -> list[str]:
        names = [""] + list(self.settings.defined_profiles)
        current = self.settings.current_profile
        if current and current not in names:
            names.append(current)
        return names

    def _profile_vocabulary(self, prefix: str) -> list[str]:
        keys = [prefix + key for key in PROFILE_ONLY_KEYS]
        for base in LANGUAGE_QUALIFIED_KEYS:
            for language in self.registry.all():
                keys.append(prefix + base + language_qualifier(language))
        return keys

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> Settings:
        """Return a deep copy of the live settings."""
        return self.settings.copy()

    def restore(self, snapshot: Settings) -> None:
        """Replace the live settings with a deep copy of `snapshot`."""
        self.settings.restore_from(snapshot)

    # ------------------------------------------------------------------
    # Rule state
    # ------------------------------------------------------------------

    def set_disabled_rule_ids(self, rule_ids: set[str]) -> None:
        """Replace the disabled rules; they are also removed from the enabled set."""
        self.settings.disabled_rule_ids = set(rule_ids)
        self.settings.enabled_rule_ids -= set(rule_ids)

    def add_disabled_rule_ids(self, rule_ids: set[str]) -> None:
        self.settings.disabled_rule_ids |= set(rule_ids)
        self.settings.enabled_rule_ids -= set(rule_ids)

    def remove_disabled_rule_ids(self, rule_ids: set[str]) -> None:
        """Move rules from the disabled set to the enabled set."""
        self.settings.disabled_rule_ids -= set(rule_ids)
        self.settings.enabled_rule_ids |= set(rule_ids)

    def remove_disabled_rule_id(self, rule_id: str) -> None:
        self.settings.disabled_rule_ids.discard(rule_id)

    def remove_enabled_rule_id(self, rule_id: str) -> None:
        self.settings.enabled_rule_ids.discard(rule_id)

    def set_enabled_rule_ids(self, rule_ids: set[str]) -> None:
        self.settings.enabled_rule_ids = set(rule_ids)

    def set_disabled_category_names(self, names: set[str]) -> None:
        self.settings.disabled_category_names = set(names)

    def set_enabled_category_names(self, names: set[str]) -> None:
        self.settings.enabled_category_names = set(names)

    def config_value(self, rule_id: str, index: int, value_type: type[T], default: T) -> T:
        """
        Return one configured parameter of a rule.

        Parameters
        ----------
        rule_id:
            Rule id.
        index:
            Position in the rule's parameter tuple.
        value_type:
            Expected type of the value.
        default:
            Returned when nothing is configured at `index` or the configured
            value has another type.
        """
        values = self.settings.configurable_values.get(rule_id)
        if values is None or index >= len(values):
            return default
        value = values[index]
        if not isinstance(value, value_type):
            return default
        if isinstance(value, bool) and value_type is not bool:
            return default
        return value

    def set_configurable_value(self, rule_id: str, values: tuple[RuleValue, ...]) -> None:
        self.settings.configurable_values[rule_id] = tuple(values)

    def remove_configurable_value(self, rule_id: str) -> None:
        self.settings.configurable_values.pop(rule_id, None)

    # ------------------------------------------------------------------
    # Underline
    # ------------------------------------------------------------------

    def init_style_categories(self, rules: list[RuleInfo]) -> None:
        """Rebuild the style-like and optional classification from the live rules."""
        self.classification = classify_rules(rules)

    def underline_color(self, category: str, rule_id: str | None = None) -> QColor:
        """Resolve the underline color for a match; see `config_engine.underline`."""
        return underline.underline_color(
            self.settings,
            self.classification,
            category,
            rule_id,
            is_open_office=self.options.is_open_office,
        )

    def underline_type(self, category: str, rule_id: str | None = None) -> int:
        return underline.underline_type(self.settings, category, rule_id)

    def set_underline_color(self, category: str, color: QColor) -> None:
        self.settings.underline_colors[category] = color

    def set_underline_rule_color(self, rule_id: str, color: QColor) -> None:
        self.settings.underline_rule_colors[rule_id] = color

    def reset_underline_color(self, category: str) -> None:
        self.settings.underline_colors.pop(category, None)

    def reset_underline_rule_color(self, rule_id: str) -> None:
        self.settings.underline_rule_colors.pop(rule_id, None)

    def set_underline_type(self, category: str, style: int) -> None:
        self.settings.underline_types[category] = style

    def set_underline_rule_type(self, rule_id: str, style: int) -> None:
        self.settings.underline_rule_types[rule_id] = style

    def reset_underline_type(self, category: str) -> None:
        self.settings.underline_types.pop(category, None)

    def reset_underline_rule_type(self, rule_id: str) -> None:
        self.settings.underline_rule_types.pop(rule_id, None)

    # ------------------------------------------------------------------
    # Derived accessors
    # ------------------------------------------------------------------

    @property
    def default_language(self) -> Language | None:
        """Fixed language, or None when the document language is used."""
        if self.settings.use_document_language:
            return None
        return self.settings.fixed_language

    @property
    def server_url(self) -> str | None:
        return self.settings.other_server_url if self.settings.use_other_server else None

    @property
    def remote_username(self) -> str | None:
        return self.settings.remote_username if self.settings.is_premium else None

    @property
    def remote_api_key(self) -> str | None:
        return self.settings.remote_api_key if self.settings.is_premium else None

    @property
    def only_single_paragraph_mode(self) -> bool:
        return self.options.is_open_office

    def save_no_background_check(self, flag: bool, language: Language | None = None) -> None:
        """Set the background-check switch and save immediately."""
        self.settings.no_background_check = flag
        self.save(language)

    def _effective_qualifier(self, language: Language | None) -> str:
        s = self.settings
        if not s.use_document_language and s.fixed_language is not None:
            return language_qualifier(s.fixed_language)
        return language_qualifier(language)


def open_config_store(
    config_path: Path,
    language: Language | None = None,
    *,
    profile: str | None = None,
    registry: LanguageRegistry | None = None,
    tuple_codec: RuleOptionCodec | None = None,
    is_office: bool = False,
    clock: Clock | None = None,
) -> ConfigStore:
    """
    Create a store and load it.

    Open-office mode is derived from the file name: an office host whose
    file name contains ``ooo`` is treated as open-office.

    Raises
    ------
    ConfigFormatError
        If a stored value is malformed.
    """
    path = Path(config_path)
    options = StoreOptions(
        is_office=is_office,
        is_open_office=is_office and OPEN_OFFICE_MARKER in path.name,
    )
    store = ConfigStore(
        path,
        language,
        registry=registry,
        tuple_codec=tuple_codec,
        options=options,
        clock=clock,
    )
    store.load(profile)
    return store
