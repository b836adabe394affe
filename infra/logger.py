"""
Logging setup shared by the viewer, the fixture server and the launcher.

Call ``configure_logging`` once at startup; modules grab their own logger
with ``get_logger(__name__)``.
"""

from __future__ import annotations

import json as _json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from paths import LOG_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_DIR", "configure_logging", "get_logger"]

_ROOT_NAME = "reindeer"
_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(payload)


def configure_logging(
    level: str = "INFO",
    json: bool = False,
    log_file: Optional[Path] = None,
    to_file: bool = True,
) -> logging.Logger:
    """
    Configure the project logger with a console handler and an optional file handler.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG")
        json: Emit JSON lines instead of plain text
        log_file: Override for the log file path (default: storage/logs/viewer.log)
        to_file: Disable to keep logs on the console only (tests, CI)

    Returns:
        The configured project root logger
    """
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level.upper())
    root.propagate = False

    # Re-configuring replaces handlers instead of stacking duplicates.
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter: logging.Formatter = JsonFormatter() if json else logging.Formatter(_TEXT_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if to_file:
        path = Path(log_file) if log_file is not None else LOG_DIR / "viewer.log"
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the project root logger."""
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
