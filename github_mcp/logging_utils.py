"""
Logging helpers shared by the server and the tool handlers.

All output goes to stderr: stdout carries the MCP stdio stream and must not
receive anything else.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install the stderr handler on the package logger (idempotent).

    An unknown level name falls back to INFO.
    """
    global _configured

    if level is None:
        level = os.getenv("GITHUB_MCP_LOG_LEVEL", "INFO")
    level = level.strip().upper()
    if level not in LOG_LEVELS:
        level = "INFO"

    root = logging.getLogger("github_mcp")
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the package namespace."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
