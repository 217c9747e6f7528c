"""
Logging helpers for the NanoStore publisher SDK.

All SDK loggers live under the ``nanostore_publisher`` namespace. The SDK
installs a NullHandler on the package logger so nothing is printed unless
the application configures logging (or calls :func:`configure_logging`).

Example:
    ```python
    from nanostore_publisher.utils.logging import configure_logging, get_logger

    configure_logging("DEBUG")
    logger = get_logger(__name__)
    logger.info("Requesting invoice", extra={"file_size": 1024})
    ```
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "nanostore_publisher"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_root = logging.getLogger(ROOT_LOGGER_NAME)
_root.addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger inside the SDK namespace.

    Args:
        name: Module name (usually ``__name__``). Names outside the
            ``nanostore_publisher`` namespace are nested under it.

    Returns:
        Configured logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return _root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=None,
) -> logging.Handler:
    """
    Attach a stream handler to the SDK root logger.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level (name or number)
        fmt: Log record format
        stream: Output stream (defaults to stderr)

    Returns:
        The installed handler
    """
    for handler in list(_root.handlers):
        if getattr(handler, "_nanostore_handler", False):
            _root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._nanostore_handler = True  # type: ignore[attr-defined]
    _root.addHandler(handler)
    set_level(level)
    return handler


def set_level(level: Union[int, str]) -> None:
    """Set the SDK root logger level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    _root.setLevel(level)


def enable_debug() -> None:
    """Shortcut for ``set_level(logging.DEBUG)``."""
    set_level(logging.DEBUG)


def disable_logging() -> None:
    """Silence every SDK logger."""
    _root.setLevel(logging.CRITICAL + 1)
