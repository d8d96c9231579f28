"""colprof: column type classification and profiling for tabular data."""

__version__ = "0.1.0"

from colprof.core.models.base import ColumnType, ProfileWarning
from colprof.profiling import (
    ColumnProfile,
    classify_column,
    classify_with_override,
    explain_classification,
    profile_column,
    profile_table,
    summarize_profiles,
)

__all__ = [
    "ColumnProfile",
    "ColumnType",
    "ProfileWarning",
    "classify_column",
    "classify_with_override",
    "explain_classification",
    "profile_column",
    "profile_table",
    "summarize_profiles",
    "__version__",
]
