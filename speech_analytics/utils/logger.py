"""Logging helpers shared by the analyzer, the sources and the CLI."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def _resolve_level(level: int | str | None) -> int:
    """Resolves an explicit level, falling back to LOG_LEVEL and then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "").strip() or logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: int | str | None = None) -> int:
    """
    Configures root logging once and applies the resolved level.

    Arguments:
        level (int | str | None): Explicit level; overrides LOG_LEVEL.

    Returns:
        int: The level that was applied.
    """
    global _LOGGING_CONFIGURED
    resolved = _resolve_level(level)
    root_logger = logging.getLogger()
    if not _LOGGING_CONFIGURED and not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=resolved)
        for handler in root_logger.handlers:
            handler.setLevel(resolved)
    root_logger.setLevel(resolved)
    _LOGGING_CONFIGURED = True
    return resolved


def get_logger(name: str) -> logging.Logger:
    """Returns a named logger, configuring logging from the environment on first use."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
