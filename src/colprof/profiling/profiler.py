"""Column and table profiling.

profile_column turns the raw values of one column into a ColumnProfile:
counts, the resolved type (classified, or taken from a manual override),
the matching statistics block and data quality warnings.

profile_table does the same for every column of a row-oriented dataset,
and summarize_profiles aggregates the result into a TableSummary.

All functions are pure: no state survives a call, so they are safe to use
from several threads at once.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from colprof.core.logging import get_logger
from colprof.core.models.base import ColumnType, ProfileWarning
from colprof.profiling.classifier import classify_cells
from colprof.profiling.models import STATS_FIELDS, ColumnProfile, TableSummary
from colprof.profiling.patterns import PatternConfig, get_pattern_config
from colprof.profiling.statistics import build_stats, percent
from colprof.profiling.thresholds import ProfilingThresholds, get_thresholds
from colprof.profiling.values import distinct_cells, ingest, non_null

logger = get_logger(__name__)

# Internal row identifier added by the dataset loader; never profiled
ROW_ID_COLUMN = "__rowId"


def profile_column(
    values: Sequence[Any],
    column_name: str,
    type_override: ColumnType | str | None = None,
    patterns: PatternConfig | None = None,
    thresholds: ProfilingThresholds | None = None,
) -> ColumnProfile:
    """Profile a single column.

    Args:
        values: Raw column values (numbers, strings, booleans, None)
        column_name: Column name; also a classification hint
        type_override: Manually chosen type. Skips classification and marks
            the profile as type-locked.
        patterns: Pattern tables (defaults to the packaged configuration)
        thresholds: Thresholds (defaults to the packaged configuration)

    Returns:
        A fresh ColumnProfile
    """
    patterns = patterns or get_pattern_config()
    thresholds = thresholds or get_thresholds()

    cells = ingest(values)
    present = non_null(cells)
    distinct = distinct_cells(present)

    total_count = len(cells)
    null_count = total_count - len(present)
    null_percent = percent(null_count, total_count)
    unique_count = len(distinct)
    unique_percent = percent(unique_count, len(present))

    is_type_locked = bool(type_override)
    if is_type_locked:
        column_type = ColumnType(type_override)
    else:
        column_type = classify_cells(cells, column_name, patterns, thresholds).column_type

    stats = build_stats(column_type, present, patterns, thresholds)
    stats_block = {STATS_FIELDS[column_type]: stats} if stats is not None else {}

    warnings: list[ProfileWarning] = []
    if null_percent > thresholds.high_missing_percent:
        warnings.append(ProfileWarning.HIGH_MISSING_VALUES)
    if column_type is ColumnType.CATEGORICAL and unique_count > thresholds.high_cardinality_count:
        warnings.append(ProfileWarning.HIGH_CARDINALITY)
    if column_type is ColumnType.ID_UNIQUE and unique_percent < 100:
        warnings.append(ProfileWarning.DUPLICATE_IDS)

    logger.debug(
        "column_profiled",
        column=column_name,
        column_type=column_type.value,
        type_locked=is_type_locked,
        total_count=total_count,
        null_count=null_count,
        warnings=[w.value for w in warnings],
    )

    return ColumnProfile(
        name=column_name,
        type=column_type,
        is_type_locked=is_type_locked,
        total_count=total_count,
        null_count=null_count,
        null_percent=null_percent,
        unique_count=unique_count,
        unique_percent=unique_percent,
        sample_values=tuple(cell.raw for cell in distinct[: thresholds.sample_size]),
        warnings=tuple(warnings),
        **stats_block,
    )


def profile_table(
    rows: Sequence[Mapping[str, Any]],
    column_names: Sequence[str] | None = None,
    type_overrides: Mapping[str, ColumnType | str] | None = None,
) -> list[ColumnProfile]:
    """Profile every column of a row-oriented dataset.

    Args:
        rows: Dataset rows keyed by column name
        column_names: Columns to profile, in order. Defaults to the keys of
            the first row. The internal row id column is always skipped.
        type_overrides: Manual type per column name

    Returns:
        One ColumnProfile per column, in column order
    """
    if column_names is None:
        column_names = list(rows[0].keys()) if rows else []
    type_overrides = type_overrides or {}

    patterns = get_pattern_config()
    thresholds = get_thresholds()

    profiles = []
    for column_name in column_names:
        if column_name == ROW_ID_COLUMN:
            continue
        # A row missing the key counts as a null for that column
        values = [row.get(column_name) for row in rows]
        profiles.append(
            profile_column(
                values,
                column_name,
                type_override=type_overrides.get(column_name),
                patterns=patterns,
                thresholds=thresholds,
            )
        )

    logger.info("table_profiled", columns=len(profiles), rows=len(rows))
    return profiles


def summarize_profiles(
    profiles: Sequence[ColumnProfile],
    row_count: int,
    thresholds: ProfilingThresholds | None = None,
) -> TableSummary:
    """Aggregate column profiles into dataset-level counts.

    Args:
        profiles: Profiles of the dataset's columns
        row_count: Number of rows in the dataset
        thresholds: Thresholds (defaults to the packaged configuration)

    Returns:
        TableSummary with per-type column counts and missing-data figures
    """
    thresholds = thresholds or get_thresholds()

    type_counts = {column_type: 0 for column_type in ColumnType}
    missing_cells = 0
    columns_with_missing = 0
    columns_with_duplicates = 0
    high_cardinality_columns = 0

    for profile in profiles:
        type_counts[profile.type] += 1
        missing_cells += profile.null_count
        if profile.null_count > 0:
            columns_with_missing += 1
        if profile.unique_percent < 100:
            columns_with_duplicates += 1
        if (
            profile.type is ColumnType.CATEGORICAL
            and profile.categorical_stats is not None
            and profile.categorical_stats.classes > thresholds.summary_high_cardinality_classes
        ):
            high_cardinality_columns += 1

    return TableSummary(
        column_count=len(profiles),
        row_count=row_count,
        type_counts=type_counts,
        missing_cells_percent=percent(missing_cells, len(profiles) * row_count),
        columns_with_missing=columns_with_missing,
        columns_with_duplicates=columns_with_duplicates,
        high_cardinality_columns=high_cardinality_columns,
    )
