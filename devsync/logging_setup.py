"""
Logging initialization for DevSync entry points.

Logs go to stderr: on the stdio transport, stdout carries the MCP protocol.
"""

import logging
import sys
from typing import Optional

from devsync.config import get_log_level

_INITIALIZED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once, from the log_level config value."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    log_level = getattr(logging, (level or get_log_level()).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    _INITIALIZED = True
