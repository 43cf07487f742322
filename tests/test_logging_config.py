"""Tests for structured logging setup."""
import json
import logging

import pytest
import structlog

from songlist_pom.logging_config import COMBINED_LOG, ERROR_LOG, configure_logging


@pytest.fixture
def log_dir(tmp_path):
    yield tmp_path / "logs"
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    structlog.reset_defaults()


def read_json_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


class TestConfigureLogging:
    """Tests for log sinks."""

    def test_creates_log_dir(self, log_dir):
        configure_logging(log_dir=log_dir)
        assert log_dir.is_dir()

    def test_error_goes_to_both_files(self, log_dir):
        """Test that errors land in error.log and combined.log as JSON."""
        configure_logging(log_dir=log_dir)
        logger = structlog.get_logger("songlist_pom.test")

        logger.error("probe_crashed", element="logo")
        for handler in logging.getLogger().handlers:
            handler.flush()

        errors = read_json_lines(log_dir / ERROR_LOG)
        combined = read_json_lines(log_dir / COMBINED_LOG)
        assert errors[0]["event"] == "probe_crashed"
        assert errors[0]["element"] == "logo"
        assert errors[0]["level"] == "error"
        assert "timestamp" in errors[0]
        assert combined[0]["event"] == "probe_crashed"

    def test_info_only_in_combined(self, log_dir):
        configure_logging(log_dir=log_dir)
        logger = structlog.get_logger("songlist_pom.test")

        logger.info("probe_result", element="logo", visible=True)
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert read_json_lines(log_dir / ERROR_LOG) == []
        combined = read_json_lines(log_dir / COMBINED_LOG)
        assert combined[0]["visible"] is True
        assert combined[0]["logger"] == "songlist_pom.test"

    def test_debug_needs_verbose(self, log_dir):
        configure_logging(log_dir=log_dir)
        assert logging.getLogger().level == logging.INFO

        configure_logging(verbose=True, log_dir=log_dir)
        assert logging.getLogger().level == logging.DEBUG

    def test_console_line(self, log_dir, capsys):
        configure_logging(log_dir=log_dir)

        structlog.get_logger("songlist_pom.test").warning("header_links_not_fully_loaded")

        assert "header_links_not_fully_loaded" in capsys.readouterr().out
