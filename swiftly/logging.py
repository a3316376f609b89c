"""Logging helpers. All swiftly loggers are children of the ``swiftly`` logger."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_LOGGER_NAME = "swiftly"

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``swiftly`` namespace.

    Parameters
    ----------
    name : str
        Component name, e.g. ``"CacheStore"``. Names already starting with ``swiftly`` (such
        as ``__name__`` of a swiftly module) are used as is.

    Returns
    -------
    logging.Logger
        The logger.
    """
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the ``swiftly`` logger to write to stderr at the given level.

    Calling this more than once only updates the level; a single handler is installed.

    Parameters
    ----------
    level : Union[int, str]
        A logging level or its name (e.g. ``"DEBUG"``).

    Returns
    -------
    logging.Logger
        The configured ``swiftly`` logger.
    """
    global _handler

    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {name}")

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(_handler)
    logger.setLevel(level)
    return logger
