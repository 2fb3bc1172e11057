"""Logging configuration for the interactive tracker.

The console handler writes to stderr so log lines never mix with the menu
output on stdout.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

APP_LOGGERS = ("cli", "main", "models", "registry", "storage", "theme")


class _ConsoleNoiseFilter(logging.Filter):
    """Keep our own records; let third-party ones through only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split(".", 1)[0] in APP_LOGGERS:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure the root logger with:
    - Console handler: stderr, filtered for interactive use
    - File handler (optional): full logs for debugging

    Call once, before the menu loop starts.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
