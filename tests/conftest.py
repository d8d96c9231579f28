"""Shared pytest fixtures for all tests."""

import pytest

from colprof.core.config import get_settings
from colprof.profiling.patterns import PatternConfig, clear_pattern_cache, get_pattern_config
from colprof.profiling.thresholds import (
    ProfilingThresholds,
    clear_thresholds_cache,
    get_thresholds,
)


@pytest.fixture(autouse=True)
def _reset_config_caches():
    """Start every test from freshly loaded configuration."""
    get_settings.cache_clear()
    clear_pattern_cache()
    clear_thresholds_cache()
    yield
    get_settings.cache_clear()
    clear_pattern_cache()
    clear_thresholds_cache()


@pytest.fixture
def patterns() -> PatternConfig:
    """Packaged pattern tables."""
    return get_pattern_config()


@pytest.fixture
def thresholds() -> ProfilingThresholds:
    """Packaged thresholds."""
    return get_thresholds()
