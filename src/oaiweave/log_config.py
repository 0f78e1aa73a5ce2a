# oaiweave/log_config.py
"""Logging configuration for the oaiweave library using Loguru.

Library modules log through the shared Loguru ``logger`` re-exported here.
Nothing is configured on import; applications that want the standard
oaiweave format call ``configure_logging`` once at startup.
"""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink=sys.stderr):
    """
    Configures Loguru logger.

    Removes default handlers and adds a new one with the specified level and sink.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "WARNING").
        sink: The output sink (e.g., sys.stderr, "harvest.log").
    """
    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=False,
    )
    logger.debug(f"oaiweave logging configured with level={level.upper()}")


__all__ = ["LOG_FORMAT", "configure_logging", "logger"]
