"""Structured logging for the client library."""

import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from .config import Settings
from .config import settings as default_settings

# Корневой логгер библиотеки; приложение может настроить его отдельно от root
LIBRARY_LOGGER = "ticktick_sync"

# Один HTTP обмен = один request_id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Атрибуты, которые есть у любого LogRecord; всё остальное пришло через extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def generate_request_id() -> str:
    """Short random id for one exchange."""
    return uuid.uuid4().hex[:12]


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """
    Bind a request id to every log record emitted inside the block.

    Пример:
        with request_scope() as rid:
            logger.info("Request completed")   # request_id == rid
    """
    token = request_id_var.set(request_id or generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)


def _record_extra(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, UTC)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    {
        "timestamp": "2026-01-22T12:00:00.123+00:00",
        "level": "INFO",
        "logger": "ticktick_sync.services.sync",
        "message": "Sync completed",
        "request_id": "3f2a9c01d4e7",
        "extra": {"projects": 2, "tasks": 3, "tags": 3, "tasks_skipped": 0}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        extra = _record_extra(record)
        if extra:
            log_data["extra"] = extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable line: time | level | [request] logger: message key=value ..."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _record_time(record).strftime("%Y-%m-%d %H:%M:%S")
        request_id = request_id_var.get()
        prefix = f"[{request_id[:8]}] " if request_id else ""

        line = f"{timestamp} | {record.levelname:8} | {prefix}{record.name}: {record.getMessage()}"

        extra = _record_extra(record)
        if extra:
            line += " " + " ".join(f"{key}={value}" for key, value in extra.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    settings: Settings | None = None,
) -> logging.Logger:
    """
    Attach a stdout handler to the library logger.

    Библиотека сама не вызывает setup_logging - это решение приложения.
    Настраивается только логгер "ticktick_sync", root не трогаем.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR, CRITICAL (defaults to LOG_LEVEL)
        log_format: "json" or "simple" (defaults to LOG_FORMAT)
        settings: Settings to take the defaults from

    Returns:
        The configured library logger
    """
    settings = settings or default_settings
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    fmt = (log_format or settings.LOG_FORMAT).lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else SimpleFormatter())

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.setLevel(level)
    library_logger.propagate = False

    # transport уже логирует каждый обмен
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return library_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a library module (pass __name__)."""
    return logging.getLogger(name)
