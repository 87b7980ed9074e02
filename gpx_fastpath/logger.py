"""Centralized logging configuration for gpx-fastpath.

All modules log through the 'gpx_fastpath' logger. Messages are plain
'LEVEL: message' lines; the scanner's per-point diagnostics only appear once
debug mode is on.
"""

import logging
import sys
from typing import Optional, TextIO

__all__ = [
    'setup_logger',
    'logger',
    'set_debug_mode',
]


def setup_logger(
    name: str = 'gpx_fastpath',
    level: int = logging.INFO,
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name
        level: Base logging level
        debug: If True, set level to DEBUG
        stream: Output stream, stdout by default

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(logging.DEBUG if debug else logging.INFO)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(handler)

    return logger


logger = setup_logger()


def set_debug_mode(enabled: bool) -> None:
    """Switch the package logger and its handlers between DEBUG and INFO."""
    level = logging.DEBUG if enabled else logging.INFO
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
