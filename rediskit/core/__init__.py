"""
Core infrastructure layer for rediskit.

Purpose
-------
Provide a single import surface for the core subsystems:

- Configuration management (Config)
- Redis subsystem (RedisClient, RedisService)
- Logging (structured logging, logger factory)
- Application exceptions (AppError hierarchy)

Design Decisions
----------------
- This module is intentionally thin: no logic, no configuration, no I/O.
- Public API is explicit via __all__.
"""

from rediskit.core.config import Config
from rediskit.core.exceptions import (
    AppError,
    ErrorCode,
    ReplyDecodeError,
    ValidationError,
)
from rediskit.core.logging import LogContext, get_logger, setup_logging
from rediskit.core.redis import RedisClient, RedisService

__all__ = [
    "Config",
    "AppError",
    "ErrorCode",
    "ValidationError",
    "ReplyDecodeError",
    "get_logger",
    "setup_logging",
    "LogContext",
    "RedisClient",
    "RedisService",
]
