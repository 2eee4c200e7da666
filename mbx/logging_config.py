"""mbx logging configuration.

The curses screen owns stdout/stderr while a session runs, so log records go
to a file (default: `~/.mbx/logs/mbx.log`, override with `MBX_LOG_PATH`).
Level defaults to WARNING and can be raised with `MBX_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from mbx.constants import DEFAULT_LOG_PATH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def resolve_log_path() -> Path:
    """Return the log file path from the environment or the default."""
    return Path(os.getenv("MBX_LOG_PATH", DEFAULT_LOG_PATH)).expanduser()


def setup_logging(level: Optional[str] = None) -> None:
    """Configure mbx logging.

    Args:
        level: Optional override for `MBX_LOG_LEVEL`.
    """
    global _configured
    if level:
        os.environ["MBX_LOG_LEVEL"] = level

    root = logging.getLogger("mbx")
    root.setLevel(os.getenv("MBX_LOG_LEVEL", "WARNING").upper())
    if _configured:
        return

    log_path = resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _configured = True
