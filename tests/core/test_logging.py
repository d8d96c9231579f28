"""Tests for structured logging setup."""

import json

import pytest
import structlog

from colprof.core.logging import configure_logging, get_logger, log_context


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for logging configuration."""

    def test_json_output(self, capsys):
        configure_logging(log_level="INFO", log_format="json")

        get_logger("colprof.test").info("table_profiled", columns=3)

        event = json.loads(capsys.readouterr().err.strip())
        assert event["event"] == "table_profiled"
        assert event["columns"] == 3
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self, capsys):
        configure_logging(log_level="WARNING", log_format="json")

        logger = get_logger("colprof.test")
        logger.debug("column_classified")
        logger.info("table_profiled")

        assert capsys.readouterr().err == ""

    def test_defaults_from_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("COLPROF_LOG_LEVEL", "debug")
        monkeypatch.setenv("COLPROF_LOG_FORMAT", "json")
        configure_logging(show_timestamps=False)

        get_logger("colprof.test").debug("column_classified", rule="categorical")

        event = json.loads(capsys.readouterr().err.strip())
        assert event["rule"] == "categorical"
        assert "timestamp" not in event

    def test_log_context(self, capsys):
        configure_logging(log_format="json")

        logger = get_logger("colprof.test")
        with log_context(dataset="sales.csv"):
            logger.warning("inside")
        logger.warning("outside")

        inside, outside = (json.loads(line) for line in capsys.readouterr().err.splitlines())
        assert inside["dataset"] == "sales.csv"
        assert "dataset" not in outside
