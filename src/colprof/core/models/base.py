"""Core vocabulary shared by the classifier and the profiler.

These enums are the contract with consumers of a ColumnProfile: the
string values are what the UI layer branches on.
"""

from __future__ import annotations

from enum import Enum


class ColumnType(str, Enum):
    """Kind of data held by a column."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    TEXT = "text"
    ID_UNIQUE = "id_unique"
    CONSTANT = "constant"  # Only reachable through a manual override


class ProfileWarning(str, Enum):
    """Data quality flags attached to a profile."""

    HIGH_MISSING_VALUES = "high_missing_values"
    HIGH_CARDINALITY = "high_cardinality"
    DUPLICATE_IDS = "duplicate_ids"
