"""
Logging bootstrap for the CLI.

With ENVPROFILES_LOG_PATH set, records are appended to that file as JSON
lines. Otherwise they go to stderr through Rich, so stdout stays clean
for shell code emitted by ``envprofiles load``.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from .console import err_console

DEFAULT_LEVEL = "WARNING"

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class JsonlHandler(logging.Handler):
    """Appends one JSON object per record to a file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            for key, value in record.__dict__.items():
                if key not in _RESERVED_ATTRS:
                    payload.setdefault(key, value)
            if record.exc_info:
                payload["exc"] = logging.Formatter().formatException(record.exc_info)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_logging(path: str | None = None, level: str | None = None) -> None:
    """Configure the root logger once at CLI startup.

    Args:
        path: JSONL log file; defaults to ENVPROFILES_LOG_PATH
        level: Level name; defaults to ENVPROFILES_LOG_LEVEL, then WARNING
    """
    path = path or os.environ.get("ENVPROFILES_LOG_PATH")
    level = (level or os.environ.get("ENVPROFILES_LOG_LEVEL") or DEFAULT_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.WARNING))

    # Re-running replaces our own handlers instead of duplicating them
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler | RichHandler):
            root.removeHandler(handler)

    if path:
        root.addHandler(JsonlHandler(path))
    else:
        root.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))
