"""
rediskit Logging Infrastructure

Exports the logger factory, opt-in handler setup and log context helpers.
"""

from rediskit.core.logging.logger import (
    ContextFilter,
    JSONFormatter,
    LogContext,
    get_log_context,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    "get_log_context",
    "ContextFilter",
    "JSONFormatter",
]
