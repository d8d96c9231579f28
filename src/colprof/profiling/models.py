"""Column profile models.

Pydantic models for the profiling output:
- ColumnProfile: Complete profile of one column (type + statistics + warnings)
- NumericStats, CategoricalStats, BooleanStats, DatetimeStats, TextStats,
  IdUniqueStats: the per-type statistics blocks
- Classification: Resolved type plus the rule that produced it
- TableSummary: Aggregate view over the profiles of a dataset

All models are frozen. Field names are snake_case; ``model_dump(by_alias=True)``
produces the camelCase keys the UI layer reads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from colprof.core.models.base import ColumnType, ProfileWarning


class _ProfileModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class NumericStats(_ProfileModel):
    """Statistics for numeric columns.

    Quartiles are picked by index from the sorted values, not interpolated.
    ``std`` is the population standard deviation.
    """

    min: float
    max: float
    mean: float
    median: float
    std: float
    q1: float
    q3: float
    outlier_count: int
    outlier_percent: float


class CategoryCount(_ProfileModel):
    """A category with its frequency."""

    value: str
    count: int
    percent: float


class CategoricalStats(_ProfileModel):
    """Statistics for categorical columns."""

    classes: int
    top_categories: tuple[CategoryCount, ...] = ()
    has_rare_categories: bool


class BooleanStats(_ProfileModel):
    """Statistics for boolean columns.

    Percentages are relative to true_count + false_count.
    """

    true_count: int
    false_count: int
    true_percent: float
    false_percent: float


class DatetimeStats(_ProfileModel):
    """Statistics for datetime columns. Dates are UTC-aware."""

    min_date: datetime
    max_date: datetime
    parse_format: str = "auto"
    timezone: str | None = None
    has_invalid: bool
    invalid_count: int


class TextStats(_ProfileModel):
    """Statistics for free-text columns. Ratios are percentages of all characters."""

    avg_length: float
    min_length: int
    max_length: int
    whitespace_ratio: float
    symbol_ratio: float
    has_empty_strings: bool


class IdUniqueStats(_ProfileModel):
    """Statistics for identifier columns."""

    is_unique: bool
    duplicate_count: int
    pattern: str | None = None


STATS_FIELDS: dict[ColumnType, str] = {
    ColumnType.NUMERIC: "numeric_stats",
    ColumnType.CATEGORICAL: "categorical_stats",
    ColumnType.BOOLEAN: "boolean_stats",
    ColumnType.DATETIME: "datetime_stats",
    ColumnType.TEXT: "text_stats",
    ColumnType.ID_UNIQUE: "id_unique_stats",
}

StatsBlock = (
    NumericStats | CategoricalStats | BooleanStats | DatetimeStats | TextStats | IdUniqueStats
)


class ColumnProfile(_ProfileModel):
    """Profile of one column.

    Counts cover the whole input; null, missing and empty-string values all
    count as nulls. Unique counts cover non-null values only. At most one
    statistics block is populated, the one matching ``type``.
    """

    name: str
    type: ColumnType
    is_type_locked: bool = False

    total_count: int
    null_count: int
    null_percent: float
    unique_count: int
    unique_percent: float

    sample_values: tuple[Any, ...] = ()

    numeric_stats: NumericStats | None = None
    categorical_stats: CategoricalStats | None = None
    boolean_stats: BooleanStats | None = None
    datetime_stats: DatetimeStats | None = None
    text_stats: TextStats | None = None
    id_unique_stats: IdUniqueStats | None = None

    warnings: tuple[ProfileWarning, ...] = ()

    @model_validator(mode="after")
    def _check_stats_block(self) -> ColumnProfile:
        expected = STATS_FIELDS.get(self.type)
        for field_name in STATS_FIELDS.values():
            if field_name != expected and getattr(self, field_name) is not None:
                raise ValueError(f"{field_name} is not valid for a {self.type.value} column")
        return self

    @property
    def non_null_count(self) -> int:
        return self.total_count - self.null_count

    @property
    def stats(self) -> StatsBlock | None:
        """The populated statistics block, if any."""
        field_name = STATS_FIELDS.get(self.type)
        return getattr(self, field_name) if field_name else None


class Classification(_ProfileModel):
    """Outcome of the type classifier.

    ``rule`` names the first rule that fired. Ratios are filled in only when
    classification got far enough to compute them.
    """

    column_type: ColumnType
    rule: str
    non_null_count: int = 0
    distinct_count: int = 0
    numeric_ratio: float | None = None
    datetime_ratio: float | None = None
    unique_ratio: float | None = None


class TableSummary(_ProfileModel):
    """Aggregate view over the column profiles of one dataset."""

    column_count: int
    row_count: int
    type_counts: dict[ColumnType, int] = Field(default_factory=dict)
    missing_cells_percent: float = 0.0
    columns_with_missing: int = 0
    columns_with_duplicates: int = 0
    high_cardinality_columns: int = 0
