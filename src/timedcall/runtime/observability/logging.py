"""Logging setup for timedcall.

Library modules log through stdlib loggers under the `timedcall` namespace
(`timedcall.runner`, `timedcall.ticker`) and never configure handlers
themselves. Applications call configure_logging() once at startup.

Quick Start:
    >>> from timedcall.runtime.observability import configure_logging
    >>> configure_logging(format="text", level="DEBUG")
    >>> # Production (JSON lines for aggregation)
    >>> configure_logging(format="json")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

from timedcall.foundation.config import get_settings

ROOT_LOGGER = "timedcall"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_TEXT_FORMAT_NO_TS = "[%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON Lines output. One object per record."""

    def __init__(self, *, timestamps: bool = True) -> None:
        super().__init__()
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if self.timestamps:
            data["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def configure_logging(
    format: str | None = None,  # noqa: A002 - matches settings field name
    level: str | None = None,
    *,
    output: TextIO | None = None,
    timestamps: bool | None = None,
) -> logging.Handler:
    """Install a single handler on the `timedcall` logger.

    Omitted arguments come from LoggingSettings (TIMEDCALL_LOG_*).
    Calling again replaces the previously installed handler.

    Args:
        format: "text" (human) or "json" (machine)
        level: Minimum log level - DEBUG, INFO, WARNING, ERROR, CRITICAL
        output: Stream for the handler (default: TIMEDCALL_LOG_STREAM)
        timestamps: Prefix records with a timestamp

    Returns:
        The installed handler

    Raises:
        ValueError: For an unknown format or level
    """
    settings = get_settings()
    fmt = format or settings.logging.format
    level_name = (level or settings.effective_log_level).upper()
    stamps = settings.logging.timestamps if timestamps is None else timestamps
    stream = output or (sys.stdout if settings.logging.stream == "stdout" else sys.stderr)

    level_int = logging.getLevelName(level_name)
    if not isinstance(level_int, int):
        raise ValueError(f"Unknown level: {level_name}")

    handler = logging.StreamHandler(stream)
    if fmt == "json":
        handler.setFormatter(JsonFormatter(timestamps=stamps))
    elif fmt == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT if stamps else _TEXT_FORMAT_NO_TS))
    else:
        raise ValueError(f"Unknown format: {fmt}. Use 'text' or 'json'")
    handler._timedcall = True  # type: ignore[attr-defined]

    root = logging.getLogger(ROOT_LOGGER)
    for old in [h for h in root.handlers if getattr(h, "_timedcall", False)]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level_int)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger under the timedcall namespace (`get_logger("demo")` -> `timedcall.demo`)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name and name != ROOT_LOGGER else ROOT_LOGGER)
