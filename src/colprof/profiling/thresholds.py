"""Profiling threshold configuration loader.

Loads thresholds from config/profiling/thresholds.yaml. Every value has a
default, so a missing file still yields a working configuration.

Usage:
    from colprof.profiling.thresholds import get_thresholds

    thresholds = get_thresholds()
    thresholds.datetime_ratio(12)  # 0.3
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from colprof.core.config import get_settings
from colprof.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProfilingThresholds:
    """Complete threshold configuration."""

    # Classification
    numeric_ratio: float = 0.8
    datetime_small_size: int = 5
    datetime_small_ratio: float = 0.2
    datetime_medium_size: int = 20
    datetime_medium_ratio: float = 0.3
    datetime_large_ratio: float = 0.5
    datetime_min_year: int = 1900
    datetime_max_year: int = 2100
    date_like_min_length: int = 8
    identifier_min_size: int = 10
    categorical_max_unique_ratio: float = 0.5
    categorical_max_avg_length: float = 50
    categorical_max_distinct: int = 100

    # Profiling
    sample_size: int = 10
    top_categories: int = 10
    rare_category_percent: float = 1
    outlier_iqr_multiplier: float = 1.5

    # Warnings
    high_missing_percent: float = 30
    high_cardinality_count: int = 50

    # Table summary
    summary_high_cardinality_classes: int = 20

    def datetime_ratio(self, non_null_count: int) -> float:
        """Match ratio a column of this size must exceed to be datetime."""
        if non_null_count <= self.datetime_small_size:
            return self.datetime_small_ratio
        if non_null_count < self.datetime_medium_size:
            return self.datetime_medium_ratio
        return self.datetime_large_ratio


def _parse_config(raw: dict[str, Any]) -> ProfilingThresholds:
    """Parse raw YAML config into ProfilingThresholds."""
    values: dict[str, Any] = {}

    classification = raw.get("classification", {})
    if "numeric_ratio" in classification:
        values["numeric_ratio"] = classification["numeric_ratio"]
    if "identifier_min_size" in classification:
        values["identifier_min_size"] = classification["identifier_min_size"]

    datetime_section = classification.get("datetime", {})
    for key, field_name in (
        ("small_column_size", "datetime_small_size"),
        ("small_column_ratio", "datetime_small_ratio"),
        ("medium_column_size", "datetime_medium_size"),
        ("medium_column_ratio", "datetime_medium_ratio"),
        ("large_column_ratio", "datetime_large_ratio"),
        ("min_year", "datetime_min_year"),
        ("max_year", "datetime_max_year"),
        ("date_like_min_length", "date_like_min_length"),
    ):
        if key in datetime_section:
            values[field_name] = datetime_section[key]

    categorical = classification.get("categorical", {})
    for key, field_name in (
        ("max_unique_ratio", "categorical_max_unique_ratio"),
        ("max_avg_length", "categorical_max_avg_length"),
        ("max_distinct", "categorical_max_distinct"),
    ):
        if key in categorical:
            values[field_name] = categorical[key]

    profiling = raw.get("profiling", {})
    for key in ("sample_size", "top_categories", "rare_category_percent", "outlier_iqr_multiplier"):
        if key in profiling:
            values[key] = profiling[key]

    warnings = raw.get("warnings", {})
    for key in ("high_missing_percent", "high_cardinality_count"):
        if key in warnings:
            values[key] = warnings[key]

    summary = raw.get("summary", {})
    if "high_cardinality_classes" in summary:
        values["summary_high_cardinality_classes"] = summary["high_cardinality_classes"]

    return ProfilingThresholds(**values)


def _default_path() -> Path:
    return get_settings().config_path / "profiling" / "thresholds.yaml"


def load_thresholds(config_path: Path | None = None) -> ProfilingThresholds:
    """Load thresholds from YAML file.

    Args:
        config_path: Path to thresholds.yaml. Defaults to the settings config dir.

    Returns:
        ProfilingThresholds with loaded values or defaults if file not found.
    """
    config_path = config_path or _default_path()

    if not config_path.exists():
        logger.warning("thresholds_config_missing", path=str(config_path))
        return ProfilingThresholds()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return _parse_config(raw)


_config_cache: ProfilingThresholds | None = None
_config_path_cache: Path | None = None


def get_thresholds(config_path: Path | None = None) -> ProfilingThresholds:
    """Get thresholds, using cache if available.

    Args:
        config_path: Optional path to override default config location.
                    If different from cached path, reloads config.
    """
    global _config_cache, _config_path_cache

    path = config_path or _default_path()
    if _config_cache is not None and _config_path_cache == path:
        return _config_cache

    _config_cache = load_thresholds(path)
    _config_path_cache = path
    return _config_cache


def clear_thresholds_cache() -> None:
    """Clear the thresholds cache.

    Useful for testing or when config file changes.
    """
    global _config_cache, _config_path_cache
    _config_cache = None
    _config_path_cache = None
