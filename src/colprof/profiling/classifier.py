"""Column type classification.

A column is classified by walking an ordered table of rules; the first
rule whose predicate holds decides the type. Order matters:

1. numeric and 0/1 checks run before datetime, since small integers parse
   as dates under lenient parsing
2. datetime runs before uniqueness, since date columns are often unique
3. native booleans are checked before the cardinality-based buckets so a
   single stray boolean is not lost among categories

Predicates read a ColumnFacts instance, which computes each feature
(numeric ratio, date matches, distinct count, ...) lazily and at most once.
Classification never raises on column content.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from colprof.core.logging import get_logger
from colprof.core.models.base import ColumnType
from colprof.profiling.dates import parse_date
from colprof.profiling.models import Classification
from colprof.profiling.patterns import PatternConfig, get_pattern_config
from colprof.profiling.thresholds import ProfilingThresholds, get_thresholds
from colprof.profiling.values import WHITESPACE, Cell, distinct_cells, ingest, non_null

logger = get_logger(__name__)

_SIMPLE_NUMBER = re.compile(r"-?\d+\.?\d*", re.ASCII)
_DATE_SEPARATORS = ("-", "/", " ")


class ColumnFacts:
    """Lazily computed features of one column."""

    def __init__(
        self,
        cells: Sequence[Cell],
        column_name: str,
        patterns: PatternConfig,
        thresholds: ProfilingThresholds,
    ):
        self.cells = cells
        self.column_name = column_name
        self.patterns = patterns
        self.thresholds = thresholds

    @cached_property
    def values(self) -> list[Cell]:
        """Non-null cells."""
        return non_null(self.cells)

    @cached_property
    def distinct(self) -> list[Cell]:
        return distinct_cells(self.values)

    @property
    def distinct_count(self) -> int:
        return len(self.distinct)

    @cached_property
    def numeric_ratio(self) -> float:
        """Share of values reading as finite numbers; native booleans never count."""
        numeric = sum(1 for cell in self.values if not cell.is_boolean and cell.number is not None)
        return numeric / len(self.values)

    @cached_property
    def datetime_matches(self) -> int:
        return sum(1 for cell in self.values if self._is_date_like(cell))

    @cached_property
    def datetime_ratio(self) -> float:
        return self.datetime_matches / len(self.values)

    @cached_property
    def unique_ratio(self) -> float:
        return self.distinct_count / len(self.values)

    @cached_property
    def avg_length(self) -> float:
        return sum(len(cell.text) for cell in self.values) / len(self.values)

    def _is_date_like(self, cell: Cell) -> bool:
        text = cell.text.strip(WHITESPACE)
        if not text or _SIMPLE_NUMBER.fullmatch(text):
            return False

        if self.patterns.match_date(text) is not None:
            return True

        parsed = parse_date(text)
        if parsed is None:
            return False

        looks_like_date = (
            any(sep in text for sep in _DATE_SEPARATORS)
            or len(text) >= self.thresholds.date_like_min_length
        )
        t = self.thresholds
        in_range = t.datetime_min_year <= parsed.year <= t.datetime_max_year
        return in_range and looks_like_date

    def computed(self, name: str) -> Any:
        """Value of a lazily computed feature, or None if no rule needed it."""
        return self.__dict__.get(name)


@dataclass(frozen=True)
class ClassificationRule:
    """One step of the classification procedure."""

    name: str
    predicate: Callable[[ColumnFacts], bool]
    column_type: ColumnType


def _is_empty(facts: ColumnFacts) -> bool:
    return not facts.values


def _is_binary_digits(facts: ColumnFacts) -> bool:
    return {cell.text for cell in facts.distinct} == {"0", "1"}


def _is_numeric(facts: ColumnFacts) -> bool:
    return facts.numeric_ratio > facts.thresholds.numeric_ratio


def _has_datetime_name(facts: ColumnFacts) -> bool:
    return facts.patterns.is_datetime_name(facts.column_name) and facts.datetime_matches > 0


def _is_mostly_datetime(facts: ColumnFacts) -> bool:
    return facts.datetime_ratio > facts.thresholds.datetime_ratio(len(facts.values))


def _is_unique_identifier(facts: ColumnFacts) -> bool:
    if facts.distinct_count != len(facts.values):
        return False
    id_like = facts.patterns.is_identifier_name(facts.column_name) or any(
        facts.patterns.has_identifier_prefix(cell.text) for cell in facts.values
    )
    return id_like or len(facts.values) > facts.thresholds.identifier_min_size


def _has_boolean_primitive(facts: ColumnFacts) -> bool:
    return any(cell.is_boolean for cell in facts.values)


def _is_boolean_vocabulary(facts: ColumnFacts) -> bool:
    return facts.distinct_count <= 2 and all(
        facts.patterns.boolean_value(cell.text) is not None for cell in facts.values
    )


def _is_two_valued_numeric(facts: ColumnFacts) -> bool:
    return facts.distinct_count == 2 and facts.numeric_ratio > facts.thresholds.numeric_ratio


def _is_low_cardinality(facts: ColumnFacts) -> bool:
    t = facts.thresholds
    return (
        facts.unique_ratio < t.categorical_max_unique_ratio
        and facts.avg_length < t.categorical_max_avg_length
        and facts.distinct_count < t.categorical_max_distinct
    )


def _is_two_categories(facts: ColumnFacts) -> bool:
    return _is_low_cardinality(facts) and facts.distinct_count == 2


def _always(facts: ColumnFacts) -> bool:
    return True


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("empty_column", _is_empty, ColumnType.TEXT),
    ClassificationRule("binary_digits", _is_binary_digits, ColumnType.BOOLEAN),
    ClassificationRule("numeric_dominance", _is_numeric, ColumnType.NUMERIC),
    ClassificationRule("datetime_name_hint", _has_datetime_name, ColumnType.DATETIME),
    ClassificationRule("datetime_ratio", _is_mostly_datetime, ColumnType.DATETIME),
    ClassificationRule("unique_identifier", _is_unique_identifier, ColumnType.ID_UNIQUE),
    ClassificationRule("boolean_primitive", _has_boolean_primitive, ColumnType.BOOLEAN),
    ClassificationRule("boolean_vocabulary", _is_boolean_vocabulary, ColumnType.BOOLEAN),
    ClassificationRule("two_valued_numeric", _is_two_valued_numeric, ColumnType.BOOLEAN),
    ClassificationRule("two_categories", _is_two_categories, ColumnType.BOOLEAN),
    ClassificationRule("categorical", _is_low_cardinality, ColumnType.CATEGORICAL),
    ClassificationRule("text_fallback", _always, ColumnType.TEXT),
)


def classify_cells(
    cells: Sequence[Cell],
    column_name: str,
    patterns: PatternConfig | None = None,
    thresholds: ProfilingThresholds | None = None,
) -> Classification:
    """Run the rule table over already-ingested cells.

    Args:
        cells: Ingested column values, nulls included
        column_name: Column name, used as a classification hint
        patterns: Pattern tables (defaults to the packaged configuration)
        thresholds: Thresholds (defaults to the packaged configuration)

    Returns:
        Classification naming the rule that fired
    """
    facts = ColumnFacts(
        cells=cells,
        column_name=column_name,
        patterns=patterns or get_pattern_config(),
        thresholds=thresholds or get_thresholds(),
    )

    # text_fallback always fires
    rule = next(r for r in RULES if r.predicate(facts))

    classification = Classification(
        column_type=rule.column_type,
        rule=rule.name,
        non_null_count=len(facts.values),
        distinct_count=facts.distinct_count,
        numeric_ratio=facts.computed("numeric_ratio"),
        datetime_ratio=facts.computed("datetime_ratio"),
        unique_ratio=facts.computed("unique_ratio"),
    )
    logger.debug(
        "column_classified",
        column=column_name,
        rule=rule.name,
        column_type=rule.column_type.value,
        non_null_count=classification.non_null_count,
    )
    return classification


def explain_classification(values: Sequence[Any], column_name: str) -> Classification:
    """Classify a column and report which rule decided it.

    Args:
        values: Raw column values (numbers, strings, booleans, None)
        column_name: Column name, used as a classification hint

    Returns:
        Classification with the resolved type, rule name and ratios
    """
    return classify_cells(ingest(values), column_name)


def classify_column(values: Sequence[Any], column_name: str) -> ColumnType:
    """Classify a column.

    Deterministic and total: every input yields one of the automatic types
    (never ``constant``).
    """
    return explain_classification(values, column_name).column_type


def classify_with_override(
    values: Sequence[Any],
    column_name: str,
    type_override: ColumnType | str | None = None,
) -> ColumnType:
    """Classify a column unless a manual override is given.

    Args:
        values: Raw column values
        column_name: Column name
        type_override: Type chosen by the user; returned unchanged when set

    Returns:
        The override, or the automatically classified type

    Raises:
        ValueError: If the override is a string naming no ColumnType
    """
    if type_override:
        return ColumnType(type_override)
    return classify_column(values, column_name)
