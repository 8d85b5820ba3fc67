"""Logging setup for the command-line and server entry points.

WHY: Parse failures are reported to the log instead of interrupting
playback, so the log is the only place a broken caption file shows up.
Library modules just call logging.getLogger(__name__); the entry points
decide where those records go.

HOW: configure_logging() attaches one stderr StreamHandler with a plain
one-line format to the ``caption_sync`` package logger.

RULES:
- Only entry points (CLI, server) call configure_logging()
- Calling it again only updates the level; handlers are never duplicated
- Output goes to stderr so stdout stays pipeable
"""

from __future__ import annotations

import logging
import sys
from typing import Union

PACKAGE_LOGGER = "caption_sync"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Route ``caption_sync`` log records to stderr.

    Args:
        level: A logging level number or name ("DEBUG", "INFO", ...).

    Returns:
        The package logger.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        name = level.strip().upper()
        resolved = logging.getLevelName(name)
        if not isinstance(resolved, int):
            raise ValueError("Unknown log level: {!r}".format(level))
        level = resolved

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
