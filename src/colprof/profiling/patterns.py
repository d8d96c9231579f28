"""Pattern table configuration loader."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from colprof.core.config import get_settings
from colprof.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Pattern:
    """A single value pattern definition."""

    name: str
    pattern: str
    exact: bool = False
    case_sensitive: bool = True
    examples: list[str] | None = None

    def __post_init__(self):
        """Compile regex pattern."""
        flags = re.ASCII if self.case_sensitive else re.ASCII | re.IGNORECASE
        self._regex = re.compile(self.pattern, flags)

    def matches(self, value: str) -> bool:
        """Check if value matches this pattern.

        Exact patterns must cover the whole string, others only its start.

        Args:
            value: String value to check

        Returns:
            True if pattern matches
        """
        if not value:
            return False
        if self.exact:
            return self._regex.fullmatch(value) is not None
        return self._regex.match(value) is not None


@dataclass
class ColumnNameHint:
    """Case-insensitive column name tokens."""

    contains: list[str] = field(default_factory=list)
    equals: list[str] = field(default_factory=list)

    def matches(self, column_name: str) -> bool:
        lowered = column_name.lower()
        return lowered in self.equals or any(token in lowered for token in self.contains)


class PatternConfig:
    """Pattern tables for classification and profiling."""

    def __init__(self, config_dict: dict):
        self._config = config_dict
        self.date_patterns = self._load_patterns("date_patterns")
        self.datetime_formats = self._load_patterns("datetime_formats")
        self.identifier_patterns = self._load_patterns("identifier_patterns")

        prefix = config_dict.get("identifier_value_prefix")
        self.identifier_prefix = self._build_pattern(prefix) if prefix else None

        hints = config_dict.get("column_name_hints", {})
        self.identifier_name_hint = self._build_hint(hints.get("identifier"))
        self.datetime_name_hint = self._build_hint(hints.get("datetime"))

        tokens = config_dict.get("boolean_tokens", {})
        self.true_tokens = frozenset(str(t).lower() for t in tokens.get("true", []))
        self.false_tokens = frozenset(str(t).lower() for t in tokens.get("false", []))

    @staticmethod
    def _build_pattern(pattern_dict: dict) -> Pattern:
        return Pattern(
            name=pattern_dict["name"],
            pattern=pattern_dict["pattern"],
            exact=pattern_dict.get("exact", False),
            case_sensitive=pattern_dict.get("case_sensitive", True),
            examples=pattern_dict.get("examples"),
        )

    @staticmethod
    def _build_hint(hint_dict: dict | None) -> ColumnNameHint:
        hint_dict = hint_dict or {}
        return ColumnNameHint(
            contains=[str(t).lower() for t in hint_dict.get("contains", [])],
            equals=[str(t).lower() for t in hint_dict.get("equals", [])],
        )

    def _load_patterns(self, category: str) -> list[Pattern]:
        patterns = []
        for pattern_dict in self._config.get(category, []):
            try:
                patterns.append(self._build_pattern(pattern_dict))
            except KeyError:
                logger.warning("invalid_pattern_skipped", category=category, entry=pattern_dict)
                continue
        return patterns

    def match_date(self, value: str) -> Pattern | None:
        """Find the first date pattern that matches a value.

        Args:
            value: Trimmed string value

        Returns:
            Matching Pattern or None
        """
        return next((p for p in self.date_patterns if p.matches(value)), None)

    def datetime_format(self, value: str) -> str | None:
        """Name of the first datetime format label matching a value."""
        return next((p.name for p in self.datetime_formats if p.matches(value)), None)

    def identifier_shape(self, value: str) -> str | None:
        """Name of the first identifier shape matching a value."""
        return next((p.name for p in self.identifier_patterns if p.matches(value)), None)

    def has_identifier_prefix(self, value: str) -> bool:
        return self.identifier_prefix is not None and self.identifier_prefix.matches(value)

    def is_identifier_name(self, column_name: str) -> bool:
        return self.identifier_name_hint.matches(column_name)

    def is_datetime_name(self, column_name: str) -> bool:
        return self.datetime_name_hint.matches(column_name)

    def boolean_value(self, text: str) -> bool | None:
        """Map a token from the boolean vocabulary to True/False.

        Args:
            text: String form of a value

        Returns:
            True or False for known tokens, None otherwise
        """
        lowered = text.lower()
        if lowered in self.true_tokens:
            return True
        if lowered in self.false_tokens:
            return False
        return None


_config_cache: PatternConfig | None = None
_config_path_cache: Path | None = None


def _default_path() -> Path:
    return get_settings().config_path / "patterns" / "default.yaml"


def load_pattern_config(config_path: Path | None = None) -> PatternConfig:
    """Load pattern configuration from YAML.

    Args:
        config_path: Optional path to config file. If None, uses default from settings.

    Returns:
        PatternConfig instance
    """
    if config_path is None:
        config_path = _default_path()

    with open(config_path) as f:
        config_dict = yaml.safe_load(f) or {}

    return PatternConfig(config_dict)


def get_pattern_config(config_path: Path | None = None) -> PatternConfig:
    """Get pattern configuration, using cache if available."""
    global _config_cache, _config_path_cache

    path = config_path or _default_path()
    if _config_cache is not None and _config_path_cache == path:
        return _config_cache

    _config_cache = load_pattern_config(path)
    _config_path_cache = path
    return _config_cache


def clear_pattern_cache() -> None:
    """Clear the pattern configuration cache."""
    global _config_cache, _config_path_cache
    _config_cache = None
    _config_path_cache = None
