# src/status_watcher/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "watcher.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Console threshold per third-party logger prefix. The Notion SDK warns about
# API deprecations and bad requests, which the operator should see.
THIRD_PARTY_CONSOLE_LEVELS: dict[str, int] = {
    "notion_client": logging.WARNING,
}


class _WatcherConsoleFilter(logging.Filter):
    """
    Console gate for a long-running watcher:
    - status_watcher.* passes at the handler's own level
    - listed third-party prefixes pass from their configured level
    - everything else (httpx, asyncio, py.warnings, ...) only at ERROR+
    """

    def __init__(self, levels: dict[str, int] | None = None) -> None:
        super().__init__()
        self._levels = dict(THIRD_PARTY_CONSOLE_LEVELS if levels is None else levels)

    def _threshold(self, name: str) -> int:
        if name == "status_watcher" or name.startswith("status_watcher.") or name == "__main__":
            return logging.NOTSET
        for prefix, level in self._levels.items():
            if name == prefix or name.startswith(prefix + "."):
                return level
        return logging.ERROR

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self._threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/status-watcher",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure root logging once, at startup: filtered console on stderr and a
    rotating debug log file in log_dir. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_WatcherConsoleFilter())
    root.addHandler(console)

    log_file_handler = RotatingFileHandler(
        str(log_file),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    log_file_handler.setLevel(file_level)
    log_file_handler.setFormatter(fmt)
    root.addHandler(log_file_handler)

    logging.captureWarnings(True)

    # One line per HTTP request otherwise; the poller already logs each cycle.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
