"""Shared logger initialization.

stdout carries the MCP protocol, so every record goes to stderr.

Usage:
    from omnifocus_mcp.log import get_logger
    logger = get_logger(__name__)
    logger.info("message")
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "omnifocus_mcp"


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Idempotently attach a stderr handler to the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    package_logger = logging.getLogger("omnifocus_mcp")
    package_logger.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    package_logger.addHandler(handler)


def get_logger(name: str = "omnifocus_mcp") -> logging.Logger:
    """Return a module-level logger."""
    return logging.getLogger(name)
