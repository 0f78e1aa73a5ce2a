import sys
from io import StringIO

import pytest
from loguru import logger

from oaiweave.log_config import configure_logging


def test_configure_logging_default_level_and_sink():
    """Test configure_logging with default INFO level and stderr sink."""
    logger.remove()  # Ensure clean state
    initial_handlers_count = len(logger._core.handlers)

    configure_logging()

    assert len(logger._core.handlers) == initial_handlers_count + 1
    handler_id = list(logger._core.handlers.keys())[-1]
    handler = logger._core.handlers[handler_id]
    assert handler._levelno == logger.level("INFO").no


@pytest.mark.parametrize("level", ["DEBUG", "warning", "ERROR"])
def test_configure_logging_custom_level(level):
    """Test configure_logging with a custom, case-insensitive level."""
    logger.remove()
    configure_logging(level=level)
    handler_id = list(logger._core.handlers.keys())[-1]
    handler = logger._core.handlers[handler_id]
    assert handler._levelno == logger.level(level.upper()).no


def test_configure_logging_removes_existing_handlers():
    """Test that configure_logging removes pre-existing handlers."""
    logger.remove()
    logger.add(lambda _: None, level="ERROR")
    assert len(logger._core.handlers) == 1

    configure_logging(level="INFO")

    assert len(logger._core.handlers) == 1


def test_configure_logging_writes_to_custom_sink():
    """Test that messages below the level are filtered from a custom sink."""
    stream = StringIO()
    configure_logging(level="WARNING", sink=stream)

    logger.info("harvest started")
    logger.warning("record 3 could not be decoded")

    output = stream.getvalue()
    assert "harvest started" not in output
    assert "record 3 could not be decoded" in output
    assert "WARNING" in output


@pytest.fixture(autouse=True)
def reset_logger_after_test():
    """Fixture to reset Loguru to a default state after each test in this module."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")  # Restore a basic default handler
