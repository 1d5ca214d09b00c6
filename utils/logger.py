"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.
The HTTP server's own loggers are routed through the same handler so
request lines and application messages share one format.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn installs its own handlers; strip them and let records propagate.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_initialized = False


def resolve_level(name: str) -> int:
    """Numeric level for a level name; INFO when the name is unknown."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Configure the root logger once.

    Args:
        level: Root log level name (e.g. ``"INFO"``, ``"DEBUG"``).
    """
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    resolved = resolve_level(level)
    root.setLevel(resolved)
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    _initialized = True
    if logging.getLevelName(resolved) != str(level).strip().upper():
        logging.getLogger(__name__).warning(f"Unknown LOG_LEVEL {level!r}; using INFO.")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    configure_logging()
    return logging.getLogger(name)
