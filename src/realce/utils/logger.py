"""Minimal logging utilities for realce.

Provides a get_logger function that namespaces standard library loggers
under "realce." so applications can tune the whole library with one entry
in their logging configuration. The library never installs handlers.

Example:
    >>> from realce.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving %d markers", 4)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "realce." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("scanner")
        >>> logger.name
        'realce.scanner'
    """
    if not (name == "realce" or name.startswith("realce.")):
        name = f"realce.{name}"
    return logging.getLogger(name)
