"""General utilities for the eero package."""

from __future__ import annotations

import os
import sys

from loguru import logger

LOG_LEVEL_VAR = "EERO_LOG_LEVEL"
LOG_FILE_VAR = "EERO_LOG_FILE"
DEFAULT_LOG_LEVEL = "WARNING"

_LOGGER_CONFIGURED = False
_LEVEL = DEFAULT_LOG_LEVEL


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in {"1", "true", "yes", "on"}


def _known_level(name: str) -> bool:
    try:
        logger.level(name)
    except ValueError:
        return False
    return True


def configure_logging(*, force: bool = False) -> str:
    """Route Loguru output to stderr, and optionally a debug log file.

    Stderr defaults to WARNING and follows ``EERO_LOG_LEVEL``; unknown levels
    fall back to the default. ``EERO_LOG_FILE`` adds a rotating DEBUG file
    sink. Returns the stderr level in use.
    """
    global _LOGGER_CONFIGURED, _LEVEL
    if _LOGGER_CONFIGURED and not force:
        return _LEVEL

    requested = os.getenv(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL).strip().upper()
    level = requested if _known_level(requested) else DEFAULT_LOG_LEVEL

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        backtrace=False,
        diagnose=_env_flag("EERO_LOG_DIAGNOSE"),
        enqueue=False,
    )

    log_file = os.getenv(LOG_FILE_VAR)
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation="1 MB",
            retention=3,
            backtrace=False,
            diagnose=False,
            encoding="utf-8",
        )

    if level != requested:
        logger.bind(requested=requested, level=level).warning(
            "Unknown log level, using the default"
        )

    _LOGGER_CONFIGURED = True
    _LEVEL = level
    return level


def extract_id(url: str | None) -> str:
    """Return the canonical ID of a resource: the last segment of its URL."""
    if not url:
        return ""
    return url.rstrip("/").rsplit("/", 1)[-1]


def normalize_mac(mac: str | None) -> str:
    """Lower-case a MAC address and drop its separators."""
    if not mac:
        return ""
    return mac.strip().lower().replace(":", "").replace("-", "")


configure_logging()

__all__ = [
    "configure_logging",
    "extract_id",
    "normalize_mac",
    "logger",
]
