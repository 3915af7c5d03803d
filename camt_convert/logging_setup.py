"""Process-wide logging for ``camt_convert``.

Records from every module land on the ``"camt_convert"`` logger tree. The
CLI calls :func:`configure_logging` at startup to give that tree one stderr
handler and a level; embedding applications may skip it and route the
records through their own root configuration instead.

Modules obtain loggers through :func:`get_logger` and log concise
``event:phase key=value`` messages; they do not add handlers themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "camt_convert"
_LEVEL_ENV_VAR = "CAMT_CONVERT_LOG_LEVEL"
_CONFIGURED = False


def _level_from_value(value: int | str | None) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        # Numeric strings or standard level names (INFO/DEBUG/etc.).
        value = value.strip().upper()
        if value.isdigit():
            return int(value)
        numeric = getattr(logging, value, None)
        if isinstance(numeric, int):
            return numeric
    return None


def _parse_level(level: int | str | None) -> int:
    resolved = _level_from_value(level)
    if resolved is not None:
        return resolved
    # Fall back to CAMT_CONVERT_LOG_LEVEL, then INFO.
    resolved = _level_from_value(os.getenv(_LEVEL_ENV_VAR))
    return resolved if resolved is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach a single stderr handler to the ``camt_convert`` logger.

    Only the first call has an effect. ``level`` accepts a number or a level
    name; when it is missing or unknown, ``CAMT_CONVERT_LOG_LEVEL`` is
    consulted before falling back to ``INFO``. ``fmt`` replaces the default
    ``"%(asctime)s %(name)s %(levelname)s %(message)s"`` layout and ``stream``
    replaces ``sys.stderr`` as the handler target.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # get_logger() may have parked a NullHandler here; the stream handler replaces it.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Records would otherwise be printed again by a configured root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``.

    Until :func:`configure_logging` runs, the package logger carries only a
    ``NullHandler`` and keeps propagating, so records reach whatever the
    host process (or ``caplog``) has set up on the root logger.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
