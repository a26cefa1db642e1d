"""Process-wide logging for the booking API.

One stdout handler, one line format. The request middleware in ``app.py``
already writes a line per request, so uvicorn's own access log is quietened
to keep each request to a single line.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LEVEL = "INFO"
ACCESS_LOGGER_NAME = "uvicorn.access"

_LOGGER_INITIALIZED = False


def resolve_log_level(name: Optional[str]) -> str:
    """Map a configured level name onto a stdlib level, defaulting to INFO."""
    candidate = (name or "").strip().upper()
    if candidate and isinstance(logging.getLevelName(candidate), int):
        return logging.getLevelName(logging.getLevelName(candidate))
    return DEFAULT_LEVEL


def configure_logging(level: Optional[str] = None) -> str:
    """Configure logging once and return the level that is in effect."""
    global _LOGGER_INITIALIZED
    configured = level or get_settings().log_level
    resolved_level = resolve_log_level(configured)
    if _LOGGER_INITIALIZED:
        return resolved_level

    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger(ACCESS_LOGGER_NAME).setLevel(logging.WARNING)
    _LOGGER_INITIALIZED = True

    if not isinstance(logging.getLevelName(configured.strip().upper()), int):
        logging.getLogger(__name__).warning(
            "Unknown log level %r; falling back to %s", configured, resolved_level
        )
    return resolved_level


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
