"""Per-type column statistics.

Every builder receives the non-null cells of one column and returns its
statistics block, or None when there is nothing usable to describe.
Values a builder cannot interpret (an unparseable date, a non-numeric
string in a numeric column) are left out of that statistic only.

Sums are accumulated left to right so results are reproducible
bit-for-bit across implementations.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import datetime

from colprof.core.models.base import ColumnType
from colprof.profiling.dates import parse_date, to_utc
from colprof.profiling.models import (
    BooleanStats,
    CategoricalStats,
    CategoryCount,
    DatetimeStats,
    IdUniqueStats,
    NumericStats,
    StatsBlock,
    TextStats,
)
from colprof.profiling.patterns import PatternConfig
from colprof.profiling.thresholds import ProfilingThresholds
from colprof.profiling.values import Cell, distinct_cells

_WHITESPACE_CHAR = re.compile(r"\s")
_SYMBOL_CHAR = re.compile(r"[^\sa-zA-Z0-9]")


def _running_sum(numbers: Sequence[float]) -> float:
    total = 0.0
    for number in numbers:
        total += number
    return total


def percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


# ============================================================================
# Numeric
# ============================================================================


def numeric_stats(values: Sequence[Cell], thresholds: ProfilingThresholds) -> NumericStats | None:
    """Distribution statistics with index-based quartiles and Tukey outliers.

    Quartiles are ``sorted[floor(n * p)]`` (no interpolation) and ``std`` is
    the population standard deviation. Booleans read as 1/0.

    Args:
        values: Non-null cells
        thresholds: Profiling thresholds (IQR multiplier)

    Returns:
        NumericStats, or None if no value reads as a finite number
    """
    numbers = sorted(cell.number for cell in values if cell.number is not None)
    n = len(numbers)
    if n == 0:
        return None

    mean = _running_sum(numbers) / n
    q1 = numbers[math.floor(n * 0.25)]
    median = numbers[math.floor(n * 0.5)]
    q3 = numbers[math.floor(n * 0.75)]

    squared_deviations = [(number - mean) * (number - mean) for number in numbers]
    std = math.sqrt(_running_sum(squared_deviations) / n)

    iqr = q3 - q1
    lower_bound = q1 - thresholds.outlier_iqr_multiplier * iqr
    upper_bound = q3 + thresholds.outlier_iqr_multiplier * iqr
    outlier_count = sum(1 for number in numbers if number < lower_bound or number > upper_bound)

    return NumericStats(
        min=numbers[0],
        max=numbers[-1],
        mean=mean,
        median=median,
        std=std,
        q1=q1,
        q3=q3,
        outlier_count=outlier_count,
        outlier_percent=percent(outlier_count, n),
    )


# ============================================================================
# Categorical
# ============================================================================


def categorical_stats(
    values: Sequence[Cell], thresholds: ProfilingThresholds
) -> CategoricalStats | None:
    """Category frequencies keyed by string form.

    Top categories are ordered by count descending; ties keep first-seen order.
    """
    if not values:
        return None

    counts: dict[str, int] = {}
    for cell in values:
        counts[cell.text] = counts.get(cell.text, 0) + 1

    total = len(values)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    top_categories = tuple(
        CategoryCount(value=value, count=count, percent=percent(count, total))
        for value, count in ranked[: thresholds.top_categories]
    )

    return CategoricalStats(
        classes=len(counts),
        top_categories=top_categories,
        has_rare_categories=any(
            category.percent < thresholds.rare_category_percent for category in top_categories
        ),
    )


# ============================================================================
# Boolean
# ============================================================================


def boolean_stats(values: Sequence[Cell], patterns: PatternConfig) -> BooleanStats | None:
    """True/false counts.

    Native booleans count directly, then the boolean vocabulary is tried.
    When a column has exactly two distinct values outside the vocabulary,
    the first-seen value counts as true and the second as false. Values
    matching neither are left out of both counts.
    """
    if not values:
        return None

    distinct = distinct_cells(values)
    first_text = distinct[0].text if len(distinct) == 2 else None
    second_text = distinct[1].text if len(distinct) == 2 else None

    true_count = 0
    false_count = 0
    for cell in values:
        if cell.is_boolean:
            flag = bool(cell.value)
        else:
            flag = patterns.boolean_value(cell.text)
            if flag is None:
                if cell.text == first_text:
                    flag = True
                elif cell.text == second_text:
                    flag = False

        if flag is True:
            true_count += 1
        elif flag is False:
            false_count += 1

    total = true_count + false_count
    return BooleanStats(
        true_count=true_count,
        false_count=false_count,
        true_percent=percent(true_count, total),
        false_percent=percent(false_count, total),
    )


# ============================================================================
# Datetime
# ============================================================================


def _timezone_label(value: datetime) -> str | None:
    if value.tzinfo is None:
        return None
    name = value.tzname()
    if name:
        return name
    offset = value.utcoffset()
    if offset is None:
        return None
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    return f"UTC{sign}{abs(minutes) // 60:02d}:{abs(minutes) % 60:02d}"


def datetime_stats(values: Sequence[Cell], patterns: PatternConfig) -> DatetimeStats | None:
    """Date range of a column.

    Args:
        values: Non-null cells
        patterns: Pattern tables (format labels)

    Returns:
        DatetimeStats, or None if no value parses as a date
    """
    dates: list[datetime] = []
    timezone: str | None = None
    invalid_count = 0

    for cell in values:
        parsed = parse_date(cell.text)
        if parsed is None:
            invalid_count += 1
            continue
        try:
            normalized = to_utc(parsed)
        except (ValueError, OverflowError):
            invalid_count += 1
            continue
        if timezone is None:
            timezone = _timezone_label(parsed)
        dates.append(normalized)

    if not dates:
        return None

    dates.sort()
    return DatetimeStats(
        min_date=dates[0],
        max_date=dates[-1],
        parse_format=patterns.datetime_format(values[0].text) or "auto",
        timezone=timezone,
        has_invalid=invalid_count > 0,
        invalid_count=invalid_count,
    )


# ============================================================================
# Text
# ============================================================================


def text_stats(values: Sequence[Cell]) -> TextStats | None:
    """Length and character-class statistics over string forms."""
    if not values:
        return None

    strings = [cell.text for cell in values]
    lengths = [len(s) for s in strings]
    total_chars = sum(lengths)

    whitespace_chars = 0
    symbol_chars = 0
    for s in strings:
        whitespace_chars += len(_WHITESPACE_CHAR.findall(s))
        symbol_chars += len(_SYMBOL_CHAR.findall(s))

    return TextStats(
        avg_length=total_chars / len(lengths),
        min_length=min(lengths),
        max_length=max(lengths),
        whitespace_ratio=percent(whitespace_chars, total_chars),
        symbol_ratio=percent(symbol_chars, total_chars),
        has_empty_strings=any(length == 0 for length in lengths),
    )


# ============================================================================
# Identifier
# ============================================================================


def id_unique_stats(values: Sequence[Cell], patterns: PatternConfig) -> IdUniqueStats | None:
    """Uniqueness of an identifier column.

    The shape label is inferred from the first value only.
    """
    if not values:
        return None

    distinct_count = len(distinct_cells(values))
    return IdUniqueStats(
        is_unique=distinct_count == len(values),
        duplicate_count=len(values) - distinct_count,
        pattern=patterns.identifier_shape(values[0].text),
    )


def build_stats(
    column_type: ColumnType,
    values: Sequence[Cell],
    patterns: PatternConfig,
    thresholds: ProfilingThresholds,
) -> StatsBlock | None:
    """Dispatch to the statistics builder for a column type.

    Returns None for ``constant``, which has no statistics block.
    """
    if column_type is ColumnType.NUMERIC:
        return numeric_stats(values, thresholds)
    if column_type is ColumnType.CATEGORICAL:
        return categorical_stats(values, thresholds)
    if column_type is ColumnType.BOOLEAN:
        return boolean_stats(values, patterns)
    if column_type is ColumnType.DATETIME:
        return datetime_stats(values, patterns)
    if column_type is ColumnType.TEXT:
        return text_stats(values)
    if column_type is ColumnType.ID_UNIQUE:
        return id_unique_stats(values, patterns)
    return None
