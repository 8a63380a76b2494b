"""Tests for logging configuration and the category facade."""

import json

from structlog.testing import capture_logs

from web_helpers.log_config import (
    configure_logging,
    debug,
    error,
    get_context_logger,
    guess_category,
    info,
    warn,
)


def category_of_caller():
    return guess_category()


class TestGuessCategory:
    """Test category detection from the call stack."""

    def test_direct_caller(self):
        """Test category of the calling function."""
        assert guess_category().endswith("test_direct_caller")

    def test_helper_function(self):
        """Test module-level function category."""
        category = category_of_caller()

        assert category.endswith("category_of_caller")
        assert "." in category

    def test_too_deep(self):
        """Test stack exhaustion."""
        assert guess_category(depth=10_000) is None


class TestFacade:
    """Test category-aware logging functions."""

    def test_levels(self):
        """Test each facade level."""
        with capture_logs() as logs:
            debug("d")
            info("i", value=1)
            warn("w")
            error("e")

        assert [entry["log_level"] for entry in logs] == ["debug", "info", "warning", "error"]
        assert [entry["event"] for entry in logs] == ["d", "i", "w", "e"]
        assert logs[1]["value"] == 1

    def test_guessed_category(self):
        """Test category points to the caller."""
        with capture_logs() as logs:
            info("hello")

        assert logs[0]["category"].endswith("test_guessed_category")

    def test_explicit_category(self):
        """Test explicit category wins."""
        with capture_logs() as logs:
            warn("hello", category="custom")

        assert logs[0]["category"] == "custom"

    def test_message_stringified(self):
        """Test non-string messages."""
        with capture_logs() as logs:
            info(42)

        assert logs[0]["event"] == "42"


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_output(self, capsys):
        """Test JSON lines and level filtering."""
        configure_logging(level="WARNING", fmt="json")
        logger = get_context_logger("test")

        logger.info("hidden")
        logger.warning("shown", item="Чайник")

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1

        record = json.loads(lines[0])
        assert record["event"] == "shown"
        assert record["level"] == "warning"
        assert record["item"] == "Чайник"
        assert "timestamp" in record

    def test_console_output(self, capsys):
        """Test console renderer."""
        configure_logging(level="DEBUG", fmt="console")
        get_context_logger("test").debug("visible")

        assert "visible" in capsys.readouterr().out

    def test_unknown_level(self, capsys):
        """Test unknown level falls back to INFO."""
        configure_logging(level="bogus", fmt="json")
        logger = get_context_logger("test")

        logger.debug("hidden")
        logger.info("shown")

        assert [json.loads(line)["event"] for line in capsys.readouterr().out.strip().splitlines()] == ["shown"]
