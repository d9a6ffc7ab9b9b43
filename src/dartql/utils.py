"""Utility functions for DartQL."""

import sys

from loguru import logger


def setup_logging(log_level: str = "WARNING") -> None:
    """Send log output to stderr at `log_level`, replacing loguru's default sink.

    stdout is left alone so command output can be piped (e.g. JSON results).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
        colorize=sys.stderr.isatty(),
    )
