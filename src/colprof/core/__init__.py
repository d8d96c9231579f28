"""Core module - configuration, logging, and shared models."""

from colprof.core.config import Settings, get_settings
from colprof.core.models.base import ColumnType, ProfileWarning

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Models - enums
    "ColumnType",
    "ProfileWarning",
]
