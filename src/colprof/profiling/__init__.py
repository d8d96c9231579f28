"""Column type classification and statistical profiling.

Profiling a column happens in two steps:

1. Classification: an ordered rule table decides the column type
   (numeric, categorical, boolean, datetime, text, id_unique) unless the
   caller supplies an override.
2. Statistics: the builder matching the type summarizes the non-null values.
"""

from colprof.profiling.classifier import (
    classify_column,
    classify_with_override,
    explain_classification,
)
from colprof.profiling.models import (
    BooleanStats,
    CategoricalStats,
    CategoryCount,
    Classification,
    ColumnProfile,
    DatetimeStats,
    IdUniqueStats,
    NumericStats,
    TableSummary,
    TextStats,
)
from colprof.profiling.profiler import profile_column, profile_table, summarize_profiles

__all__ = [
    # Operations
    "classify_column",
    "classify_with_override",
    "explain_classification",
    "profile_column",
    "profile_table",
    "summarize_profiles",
    # Models
    "BooleanStats",
    "CategoricalStats",
    "CategoryCount",
    "Classification",
    "ColumnProfile",
    "DatetimeStats",
    "IdUniqueStats",
    "NumericStats",
    "TableSummary",
    "TextStats",
]
