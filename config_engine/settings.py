"""
Live settings and the declarative key table.

`Settings` holds every persisted value of the active profile plus the few
global values (profile list, mother tongue, log level). Its dataclass fields are
the single source of truth for defaults, copying and resetting.

`PROFILE_KEYS` maps each per-profile field to its base key in the file and to
the kind of value stored there. Load and save walk this table instead of
handling each setting by hand.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from PySide6.QtGui import QColor

from .issue_types import IssueType
from .languages import Language
from .rule_options import RuleValue

DEFAULT_SERVER_PORT = 8081
DEFAULT_NUM_CHECK_PARAGRAPHS = -2
FONT_STYLE_INVALID = -1
FONT_SIZE_INVALID = -1
THEME_SYSTEM = 0

DEFAULT_AI_URL = "http://localhost:8080/v1/chat/completions/"
DEFAULT_AI_API_KEY = "1234567"
DEFAULT_AI_MODEL = "gpt-4"
DEFAULT_AI_IMG_URL = "http://localhost:8080/v1/images/generations/"
DEFAULT_AI_IMG_API_KEY = "1234567"
DEFAULT_AI_IMG_MODEL = "stablediffusion"
DEFAULT_AI_TTS_URL = "http://localhost:8080/tts/"
DEFAULT_AI_TTS_API_KEY = "1234567"
DEFAULT_AI_TTS_MODEL = "voice-de-eva_k-x-low"

# Global (unprefixed) metadata keys.
LT_VERSION_KEY = "ltVersion"
CURRENT_PROFILE_KEY = "currentProfile"
DEFINED_PROFILES_KEY = "definedProfiles"
MOTHER_TONGUE_KEY = "motherTongue"
LOG_LEVEL_KEY = "logLevel"

# Companion flag of the paragraph count; not a field of its own.
NO_DEFAULT_CHECK_KEY = "noDefaultCheck"


class ValueKind(Enum):
    """How a stored value is decoded and encoded."""

    BOOL = "bool"
    INT = "int"
    LENIENT_INT = "lenient_int"  # malformed text keeps the default
    STR = "str"
    PATH = "path"
    LANGUAGE = "language"
    SERVER_URL = "server_url"
    PARA_COUNT = "para_count"
    ID_SET = "id_set"
    COLOR_MAP = "color_map"
    ISSUE_COLOR_MAP = "issue_color_map"
    DEFAULT_COLORS = "default_colors"
    TYPE_MAP = "type_map"
    RULE_VALUES = "rule_values"


@dataclass(frozen=True, slots=True)
class SettingKey:
    """
    One row of the key table.

    Attributes
    ----------
    attr:
        Field name on `Settings`.
    key:
        Base key in the file, before profile prefix and language qualifier.
    kind:
        Value kind driving decode and encode.
    qualified:
        True if the key carries a language qualifier.
    always:
        True if the value is written even when it equals its default.
    """

    attr: str
    key: str
    kind: ValueKind
    qualified: bool = False
    always: bool = False


@dataclass(slots=True)
class Settings:
    """Every live setting of one profile, plus global metadata."""

    # Global values, stored without profile prefix.
    lt_version: str | None = None
    current_profile: str = ""
    defined_profiles: list[str] = field(default_factory=list)
    mother_tongue: Language | None = None
    log_level: str | None = None

    # Language-qualified rule state.
    disabled_rule_ids: set[str] = field(default_factory=set)
    enabled_rule_ids: set[str] = field(default_factory=set)
    disabled_category_names: set[str] = field(default_factory=set)
    enabled_category_names: set[str] = field(default_factory=set)
    configurable_values: dict[str, tuple[RuleValue, ...]] = field(default_factory=dict)
    enabled_rules_only: bool = False

    language: Language | None = None
    fixed_language: Language | None = None
    ngram_directory: Path | None = None
    auto_detect: bool = False
    tagger_shows_disambig_log: bool = False
    use_gui_config: bool = False
    server_mode: bool = False
    server_port: int = DEFAULT_SERVER_PORT
    num_check_paragraphs: int = DEFAULT_NUM_CHECK_PARAGRAPHS
    color_selection: int = 0
    check_direct_speech: int = 0
    theme_selection: int = THEME_SYSTEM
    do_reset_check: bool = False
    use_text_level_queue: bool = False
    no_background_check: bool = False
    use_document_language: bool = True
    is_multi_thread: bool = False
    lt_switched_off: bool = False
    external_rule_directory: str | None = None

    do_remote_check: bool = False
    use_other_server: bool = False
    other_server_url: str | None = None
    is_premium: bool = False
    remote_username: str | None = None
    remote_api_key: str | None = None

    mark_single_char_bold: bool = False
    use_lt_spell_checker: bool = True
    use_long_messages: bool = False
    no_synonyms_as_suggestions: bool = False
    include_tracked_changes: bool = False
    enable_tmp_off_rules: bool = False
    enable_goal_specific_rules: bool = False
    filter_overlapping_matches: bool = True
    save_lo_cache: bool = True

    ai_url: str = DEFAULT_AI_URL
    ai_api_key: str = DEFAULT_AI_API_KEY
    ai_model: str = DEFAULT_AI_MODEL
    use_ai_support: bool = False
    ai_auto_correct: bool = True
    ai_auto_suggestion: bool = False
    ai_show_stylistic_changes: int = 0
    ai_img_url: str = DEFAULT_AI_IMG_URL
    ai_img_api_key: str = DEFAULT_AI_IMG_API_KEY
    ai_img_model: str = DEFAULT_AI_IMG_MODEL
    use_ai_img_support: bool = False
    ai_tts_url: str = DEFAULT_AI_TTS_URL
    ai_tts_api_key: str = DEFAULT_AI_TTS_API_KEY
    ai_tts_model: str = DEFAULT_AI_TTS_MODEL
    use_ai_tts_support: bool = False

    font_name: str | None = None
    font_style: int = FONT_STYLE_INVALID
    font_size: int = FONT_SIZE_INVALID
    look_and_feel_name: str | None = None

    error_colors: dict[IssueType, QColor] = field(default_factory=dict)
    underline_colors: dict[str, QColor] = field(default_factory=dict)
    underline_rule_colors: dict[str, QColor] = field(default_factory=dict)
    underline_default_colors: list[QColor] = field(default_factory=list)
    underline_types: dict[str, int] = field(default_factory=dict)
    underline_rule_types: dict[str, int] = field(default_factory=dict)

    @classmethod
    def defaults(cls) -> "Settings":
        """Return a fresh instance holding only built-in defaults."""
        return cls()

    def copy(self) -> "Settings":
        """Return a deep copy; no set, map, list or color is shared."""
        clone = Settings()
        clone.restore_from(self)
        return clone

    def restore_from(self, other: "Settings") -> None:
        """Overwrite every field with a deep copy of the matching field of `other`."""
        for f in dataclasses.fields(self):
            setattr(self, f.name, deep_copy_value(getattr(other, f.name)))

    def reset(self) -> None:
        """Return every field to its built-in default."""
        self.restore_from(Settings())


def deep_copy_value(value: Any) -> Any:
    """Copy containers and colors; immutable values are returned as-is."""
    if isinstance(value, QColor):
        return QColor(value)
    if isinstance(value, dict):
        return {k: deep_copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [deep_copy_value(v) for v in value]
    if isinstance(value, set):
        return set(value)
    return value


def default_of(attr: str) -> Any:
    """Return the built-in default for one `Settings` field."""
    return getattr(_DEFAULTS, attr)


_DEFAULTS = Settings()


PROFILE_KEYS: tuple[SettingKey, ...] = (
    SettingKey("disabled_rule_ids", "disabledRules", ValueKind.ID_SET, qualified=True),
    SettingKey("enabled_rule_ids", "enabledRules", ValueKind.ID_SET, qualified=True),
    SettingKey("disabled_category_names", "disabledCategories", ValueKind.ID_SET, qualified=True),
    SettingKey("enabled_category_names", "enabledCategories", ValueKind.ID_SET, qualified=True),
    SettingKey("configurable_values", "configurableRuleValues", ValueKind.RULE_VALUES, qualified=True),
    SettingKey("enabled_rules_only", "enabledRulesOnly", ValueKind.BOOL),
    SettingKey("language", "language", ValueKind.LANGUAGE),
    SettingKey("fixed_language", "fixedLanguage", ValueKind.LANGUAGE),
    SettingKey("ngram_directory", "ngramDir", ValueKind.PATH),
    SettingKey("auto_detect", "autoDetect", ValueKind.BOOL, always=True),
    SettingKey("tagger_shows_disambig_log", "taggerShowsDisambigLog", ValueKind.BOOL, always=True),
    SettingKey("use_gui_config", "useGUIConfig", ValueKind.BOOL, always=True),
    SettingKey("server_mode", "serverMode", ValueKind.BOOL, always=True),
    SettingKey("server_port", "serverPort", ValueKind.INT, always=True),
    SettingKey("num_check_paragraphs", "numberParagraphs", ValueKind.PARA_COUNT),
    SettingKey("color_selection", "colorSelection", ValueKind.INT),
    SettingKey("check_direct_speech", "checkDirectSpeech", ValueKind.INT),
    SettingKey("theme_selection", "themeSelection", ValueKind.INT),
    SettingKey("do_reset_check", "doResetCheck", ValueKind.BOOL),
    SettingKey("use_text_level_queue", "useTextLevelQueue", ValueKind.BOOL),
    SettingKey("no_background_check", "noBackgroundCheck", ValueKind.BOOL),
    SettingKey("use_document_language", "useDocumentLanguage", ValueKind.BOOL),
    SettingKey("is_multi_thread", "isMultiThread", ValueKind.BOOL),
    SettingKey("lt_switched_off", "ltSwitchedOff", ValueKind.BOOL),
    SettingKey("external_rule_directory", "extRulesDirectory", ValueKind.STR),
    SettingKey("do_remote_check", "doRemoteCheck", ValueKind.BOOL),
    SettingKey("use_other_server", "useOtherServer", ValueKind.BOOL),
    SettingKey("other_server_url", "otherServerUrl", ValueKind.SERVER_URL),
    SettingKey("is_premium", "isPremium", ValueKind.BOOL),
    SettingKey("remote_username", "remoteUserName", ValueKind.STR),
    SettingKey("remote_api_key", "remoteApiKey", ValueKind.STR),
    SettingKey("mark_single_char_bold", "markSingleCharBold", ValueKind.BOOL),
    SettingKey("use_lt_spell_checker", "UseLtSpellChecker", ValueKind.BOOL),
    SettingKey("use_long_messages", "UseLongMessages", ValueKind.BOOL),
    SettingKey("no_synonyms_as_suggestions", "noSynonymsAsSuggestions", ValueKind.BOOL),
    SettingKey("include_tracked_changes", "includeTrackedChanges", ValueKind.BOOL),
    SettingKey("enable_tmp_off_rules", "enableTmpOffRules", ValueKind.BOOL),
    SettingKey("enable_goal_specific_rules", "enableGoalSpecificRules", ValueKind.BOOL),
    SettingKey("filter_overlapping_matches", "filterOverlappingMatches", ValueKind.BOOL),
    SettingKey("save_lo_cache", "saveLoCache", ValueKind.BOOL),
    SettingKey("ai_url", "aiUrl", ValueKind.STR),
    SettingKey("ai_api_key", "aiApiKey", ValueKind.STR),
    SettingKey("ai_model", "aiModel", ValueKind.STR),
    SettingKey("use_ai_support", "useAiSupport", ValueKind.BOOL),
    SettingKey("ai_auto_correct", "aiAutoCorrect", ValueKind.BOOL),
    SettingKey("ai_auto_suggestion", "aiAutoSuggestion", ValueKind.BOOL),
    SettingKey("ai_show_stylistic_changes", "aiShowStylisticChangesInt", ValueKind.INT),
    SettingKey("ai_img_url", "aiImgUrl", ValueKind.STR),
    SettingKey("ai_img_api_key", "aiImgApiKey", ValueKind.STR),
    SettingKey("ai_img_model", "aiImgModel", ValueKind.STR),
    SettingKey("use_ai_img_support", "useAiImgSupport", ValueKind.BOOL),
    SettingKey("ai_tts_url", "aiTtsUrl", ValueKind.STR),
    SettingKey("ai_tts_api_key", "aiTtsApiKey", ValueKind.STR),
    SettingKey("ai_tts_model", "aiTtsModel", ValueKind.STR),
    SettingKey("use_ai_tts_support", "useAiTtsSupport", ValueKind.BOOL),
    SettingKey("font_name", "font.name", ValueKind.STR),
    SettingKey("font_style", "font.style", ValueKind.LENIENT_INT),
    SettingKey("font_size", "font.size", ValueKind.LENIENT_INT),
    SettingKey("look_and_feel_name", "lookAndFeelName", ValueKind.STR),
    SettingKey("error_colors", "errorColors", ValueKind.ISSUE_COLOR_MAP),
    SettingKey("underline_colors", "underlineColors", ValueKind.COLOR_MAP),
    SettingKey("underline_rule_colors", "underlineRuleColors", ValueKind.COLOR_MAP),
    SettingKey("underline_default_colors", "underlineDefaultColors", ValueKind.DEFAULT_COLORS),
    SettingKey("underline_types", "underlineTypes", ValueKind.TYPE_MAP),
    SettingKey("underline_rule_types", "underlineRuleTypes", ValueKind.TYPE_MAP),
)

LANGUAGE_QUALIFIED_KEYS: tuple[str, ...] = tuple(k.key for k in PROFILE_KEYS if k.qualified)

# Every unqualified base key that belongs to a profile, companions included.
PROFILE_ONLY_KEYS: tuple[str, ...] = tuple(k.key for k in PROFILE_KEYS if not k.qualified) + (
    NO_DEFAULT_CHECK_KEY,
)
