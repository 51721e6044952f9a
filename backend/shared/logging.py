"""
Root logging configuration.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler once per process.
"""

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _resolve_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once. Idempotent.

    Falls back to the LOG_LEVEL setting when no level is given.
    """
    resolved = _resolve_level(level or get_settings().log_level)
    root = logging.getLogger()
    if root.handlers:
        # already configured (pytest, uvicorn, etc.)
        root.setLevel(resolved)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root.setLevel(resolved)
    root.addHandler(handler)
