"""
Logging for liveconf.

Every module logs through a child of the "liveconf" package logger. The
command line attaches one handler to that logger, writing to stderr so that
rendered trees and exported snapshots on stdout stay clean.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

PACKAGE_LOGGER = "liveconf"

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

VALID_LOG_LEVELS = tuple(_LEVELS)


def resolve_level(level: str) -> int:
    """
    Translate a level name into a logging level.

    Args:
        level: Level name, case-insensitive (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Numeric logging level

    Raises:
        ValueError: If the name is not a supported level
    """
    name = str(level).upper()
    if name not in _LEVELS:
        raise ValueError(
            f"Invalid log level: {level} (expected one of {', '.join(VALID_LOG_LEVELS)})"
        )
    return _LEVELS[name]


def level_for_flags(default: str, verbose: bool = False, debug: bool = False) -> str:
    """Pick the level name for the --verbose/--debug command line flags."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return default


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the package logger with a single console handler.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        stream: Destination of log lines (default: sys.stderr)

    Returns:
        The configured package logger

    Raises:
        ValueError: If the level name is not supported
    """
    numeric_level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the package logger or one of its children.

    Args:
        name: Module part of the logger name (e.g., "scanner")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
    return logging.getLogger(PACKAGE_LOGGER)
