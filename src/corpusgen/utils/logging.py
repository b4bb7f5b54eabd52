"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers namespaced under ``corpusgen``.
    - Allow optional verbose/debug modes.

Notes/Edge cases:
    - Configuration is idempotent; calling :func:`configure_logging` twice
      does not attach a second handler.
"""

from __future__ import annotations

import logging

__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]

ROOT_LOGGER = "corpusgen"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` placed under the package namespace."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    ``verbose`` selects ``DEBUG`` instead of ``WARNING``.  Repeated calls only
    adjust the level.
    """

    logger = logging.getLogger(ROOT_LOGGER)
    if not any(getattr(h, "_corpusgen", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._corpusgen = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
