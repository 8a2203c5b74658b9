"""
Structured logging for rediskit.

Purpose
-------
Every rediskit module logs through ``get_logger(__name__)`` with structured
``extra={...}`` fields (command, key, latency). This module turns those
records into readable console lines or one JSON object per line, and stamps
them with the caller's operation context.

Design Decisions
----------------
- rediskit is a library: importing it installs no handlers. Applications
  opt in with `setup_logging()`, which only touches the ``rediskit`` logger
  namespace and leaves the root logger to the application.
- Operation context (component, operation, correlation id) lives in a
  ContextVar, so it follows the calling thread and never leaks between them.
- Redis payloads are bytes; the JSON formatter renders them with ``str``.

Dependencies
------------
- rediskit.core.config.Config (LOG_LEVEL, LOG_JSON, ENVIRONMENT)
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging import Logger
from typing import Any, Dict, Optional

from rediskit.core.config.config import Config

ROOT_LOGGER_NAME = "rediskit"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(correlation_id)s | %(message)s"

_log_context: ContextVar[Dict[str, Any]] = ContextVar("rediskit_log_context", default={})

_handler: Optional[logging.Handler] = None


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the active LogContext onto each record; fills "N/A" when unset."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get()
        record.correlation_id = context.get("correlation_id", "N/A")
        record.component = context.get("component") or record.name.split(".", 1)[0]
        record.operation = context.get("operation", "N/A")
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields go under ``"extra"``."""

    CONTEXT_ATTRS = frozenset({"correlation_id", "component", "operation"})
    _RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
        "message",
        "asctime",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in self.CONTEXT_ATTRS:
            value = getattr(record, attr, None)
            if value not in (None, "N/A"):
                data[attr] = value

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._RESERVED
            and key not in self.CONTEXT_ATTRS
            and not key.startswith("_")
        }
        if extra:
            data["extra"] = extra
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


# ============================================================================
# Setup
# ============================================================================


def _use_json() -> bool:
    if Config.LOG_JSON is None:
        return Config.is_production()
    return Config.LOG_JSON


def setup_logging(level: Optional[str] = None) -> None:
    """
    Attach one stderr handler to the ``rediskit`` logger. Idempotent.

    Level defaults to ``Config.LOG_LEVEL``; output is JSON in production or
    when ``LOG_JSON`` is set, plain text otherwise.
    """
    global _handler
    if _handler is not None:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(ContextFilter())
    if _use_json():
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel((level or Config.LOG_LEVEL).upper())
    package_logger.addHandler(handler)
    _handler = handler

    package_logger.debug(
        "Logging initialized",
        extra={"json": _use_json(), "log_level": logging.getLevelName(package_logger.level)},
    )


def shutdown_logging() -> None:
    """Detach and close the handler installed by `setup_logging`."""
    global _handler
    if _handler is None:
        return
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.removeHandler(_handler)
    _handler.close()
    _handler = None
    package_logger.setLevel(logging.NOTSET)


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


# ============================================================================
# Operation Context
# ============================================================================


class LogContext:
    """
    Scope operation context onto every log record emitted inside the block.

    >>> with LogContext(component="leaderboard", operation="refresh"):
    ...     client.zrevrange("board", 0, 9)

    Contexts nest; the inner one replaces the outer for its duration.
    """

    def __init__(
        self,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = {
            "component": component,
            "operation": operation,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())
