"""Centralized logging configuration for the ``position_ledger`` package.

Entrypoints call ``configure_logging(...)`` once at process start. Library
modules only call ``get_logger(__name__)`` and never attach handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PACKAGE_LOGGER_NAME = "position_ledger"
_CONFIGURED = False


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    normalized_level = level.strip().upper()
    if normalized_level.isdigit():
        return int(normalized_level)
    numeric_level = getattr(logging, normalized_level, None)
    if isinstance(numeric_level, int):
        return numeric_level
    return logging.INFO


def configure_logging(
    level: int | str = logging.INFO,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach one stream handler to the package logger, exactly once.

    Args:
        level: Level as ``int`` or level name.
        fmt: Optional format string.
        stream: Output stream for the handler.

    Returns:
        None: Logger configuration is applied as side effect.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(stream)
    stream_handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger.setLevel(_parse_level(level))
    package_logger.addHandler(stream_handler)
    package_logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, keeping the package silent until configured."""

    package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    if not _CONFIGURED and not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
