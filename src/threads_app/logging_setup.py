# src/threads_app/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "threads.log"

# Modules whose INFO events the user already sees as status lines.
_STATUS_ECHO_PREFIXES = (
    "threads_app.tasks.",
    "threads_app.core.",
    "threads_app.connectors.",
)

# Marker attribute: handlers installed here (replaced on reconfigure, others left alone).
_OWNED = "_threads_app_handler"


class _StatusEchoFilter(logging.Filter):
    """
    Keep the interactive prompt readable.

    Every operation already publishes a status line that the console prints,
    so routine engine/scope/connector records would only repeat it. Those go
    to the log file; the console keeps startup/shutdown notices and anything
    at WARNING+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.WARNING:
            return True
        name = record.name
        if not name.startswith("threads_app."):
            return False
        return not name.startswith(_STATUS_ECHO_PREFIXES)


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/threads",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console on stderr (filtered) + full log file under `log_dir`.

    Safe to call again: only handlers installed by a previous call are replaced.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    console = _own(logging.StreamHandler(sys.stderr))
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_StatusEchoFilter())
    root.addHandler(console)

    file_handler = _own(logging.FileHandler(str(log_file), encoding="utf-8"))
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
