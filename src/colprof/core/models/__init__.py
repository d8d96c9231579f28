"""Core models."""

from colprof.core.models.base import ColumnType, ProfileWarning

__all__ = [
    "ColumnType",
    "ProfileWarning",
]
