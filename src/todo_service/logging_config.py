"""
Centralized logging configuration.

Every module obtains its logger through get_logger(__name__); the handler
and format are installed once, at application startup, by setup_logging().
"""
from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set once the stdout handler is installed on the root logger
_logging_configured = False


# PUBLIC_INTERFACE
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure application-wide logging on the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.

    Returns:
        The configured root logger. Repeated calls return it unchanged.
    """
    global _logging_configured

    root = logging.getLogger()
    if _logging_configured:
        return root

    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(level)

    root.setLevel(level)
    root.addHandler(handler)

    _logging_configured = True
    return root


# PUBLIC_INTERFACE
def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configuration is inherited from the root logger."""
    return logging.getLogger(name)
