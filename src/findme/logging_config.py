"""Structlog setup for the command line host."""

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure structlog for console use.

    Log lines go to stderr so they never interleave with the screen
    rendered on stdout.

    Args:
        level: Minimum level name, e.g. "DEBUG" or "WARNING"
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
