# src/logging/logger.py — v1
"""Log formatting and handler setup for the comparison service.

Both formatters pull the per-request context (request id, mode, cache key)
from contextvars, so no handler needs per-request state. JSON lines go to the
log pipeline; text lines are for a terminal.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from toolcompare.logging.context import get_context

# Server loggers that share the service handlers once setup_logging() ran.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Attributes every LogRecord has; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        k: v for k, v in record.__dict__.items()
        if k not in _RECORD_ATTRS and not k.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, request context keys inlined."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(get_context().as_dict())

        extras = _extras(record)
        if extras:
            entry["extra"] = extras
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger [request mode key=...] message``"""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        tags = [t for t in (ctx.request_id, ctx.mode) if t]
        if ctx.cache_key:
            tags.append(f"key={ctx.cache_key}")

        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{when} {record.levelname:<7s} {record.name}"
        if tags:
            line += f" [{' '.join(tags)}]"
        line += f" {record.getMessage()}"

        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``toolcompare`` namespace."""
    return logging.getLogger(f"toolcompare.{name}")


def _replace_handlers(target: logging.Logger, handlers: list[logging.Handler]) -> None:
    for old in list(target.handlers):
        target.removeHandler(old)
    for h in handlers:
        target.addHandler(h)


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """Install service handlers on the ``toolcompare`` and uvicorn loggers.

    Safe to call again: previous handlers are replaced, never stacked.

    Args:
        level: Level for the ``toolcompare`` logger.
        log_format: "json" or "text".
        log_file: Optional size-rotated log file next to stdout.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.

    Returns:
        The configured ``toolcompare`` logger.
    """
    formatter: logging.Formatter = JsonFormatter() if log_format == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from toolcompare.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation=rotation, retention=retention))
    for h in handlers:
        h.setFormatter(formatter)

    service_logger = logging.getLogger("toolcompare")
    service_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    _replace_handlers(service_logger, handlers)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        _replace_handlers(server_logger, handlers)
        server_logger.propagate = False

    return service_logger
