"""
Unit tests for structured logging.
"""

import json
import logging

import pytest

from shelfdb.logging_config import PACKAGE_LOGGER, StructuredLogger, configure_logging, format_event, get_logger


class TestFormatEvent:
    """Tests for event rendering."""

    def test_bare_event(self) -> None:
        """An event without fields is just its name."""
        assert format_event("saved", {}) == "saved"

    def test_event_with_fields(self) -> None:
        """Fields render as sorted JSON with the event name."""
        line = format_event("saved", {"size": 3, "location": "a.json"})
        assert json.loads(line) == {"event": "saved", "size": 3, "location": "a.json"}
        assert line.index('"event"') < line.index('"location"') < line.index('"size"')

    def test_non_json_fields(self) -> None:
        """Values JSON can't encode fall back to str."""
        line = format_event("x", {"obj": object})
        assert "class 'object'" in json.loads(line)["obj"]


class TestStructuredLogger:
    """Tests for the logger adapter."""

    def test_get_logger(self) -> None:
        """get_logger wraps the stdlib logger of that name."""
        logger = get_logger("shelfdb.test")
        assert isinstance(logger, StructuredLogger)
        assert logger.name == "shelfdb.test"

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each level method logs at its level."""
        caplog.set_level(logging.DEBUG, logger=PACKAGE_LOGGER)
        logger = get_logger("shelfdb.test")
        logger.debug("d", n=1)
        logger.info("i")
        logger.warning("w")
        logger.error("e")
        assert [r.levelname for r in caplog.records] == ["DEBUG", "INFO", "WARNING", "ERROR"]
        assert json.loads(caplog.records[0].getMessage()) == {"event": "d", "n": 1}

    def test_disabled_levels_skip_rendering(self) -> None:
        """Fields aren't rendered for levels the logger drops."""
        rendered = []

        class Field:
            def __str__(self) -> str:
                rendered.append(True)
                return "field"

        stdlib_logger = logging.getLogger("shelfdb.test.disabled")
        old_level = stdlib_logger.level
        stdlib_logger.setLevel(logging.CRITICAL)
        try:
            logger = get_logger("shelfdb.test.disabled")
            logger.debug("d", value=Field())
            logger.info("i", value=Field())
            logger.warning("w", value=Field())
            logger.error("e", value=Field())
            assert rendered == []
        finally:
            stdlib_logger.setLevel(old_level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_single_handler(self) -> None:
        """Repeated calls set the level without stacking handlers."""
        logger = logging.getLogger(PACKAGE_LOGGER)
        old_level, old_handlers = logger.level, list(logger.handlers)
        try:
            configure_logging("DEBUG")
            configure_logging(logging.INFO)
            assert logger.level == logging.INFO
            assert len(logger.handlers) == max(1, len(old_handlers))
        finally:
            logger.setLevel(old_level)
            logger.handlers = old_handlers
