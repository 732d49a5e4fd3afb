"""Logging helpers for notemark.

Every module logs through a child of the ``notemark`` logger. The library
installs no output handler of its own; the package root carries a
NullHandler so an application without logging config sees nothing.

Example:
    >>> from notemark.utils.logger import get_logger, set_log_level
    >>> logger = get_logger(__name__)
    >>> _ = set_log_level("DEBUG")  # show stage summaries while tuning
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "notemark"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, namespaced under ``notemark.``.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'notemark.mymodule'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> logging.Logger:
    """Set the level of the package root logger and return it."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    return root
