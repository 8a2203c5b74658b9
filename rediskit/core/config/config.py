"""
Static configuration for rediskit, read from the environment.

Purpose
-------
Hold the handful of settings RedisService and the logging setup need, with
typed parsing and bounds checks. A bad value never stops the process: it is
replaced by the default and reported through `Config.get_validation_errors()`.

Architecture Notes
------------------
- Class attributes, no instances
- ``.env`` in the working directory is loaded first (python-dotenv); real
  environment variables win over it
- Loaded once on import; call `Config.load()` again after changing the
  environment

Environment Variables
---------------------
- REDIS_URL: connection string (default: redis://localhost:6379/0)
- REDIS_PASSWORD: optional, overrides any password in REDIS_URL
- REDIS_MAX_CONNECTIONS: pool size, 1..500 (default: 50)
- REDIS_SOCKET_TIMEOUT: seconds, 1..60 (default: 5)
- ENVIRONMENT: development | testing | staging | production
- LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
- LOG_JSON: force JSON logs on/off (default: on in production only)
"""

import logging
import os
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar

from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")

_TRUE = frozenset({"true", "yes", "1", "on"})
_FALSE = frozenset({"false", "no", "0", "off"})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        >>> Environment.from_string("Production") is Environment.PRODUCTION
        True
        >>> Environment.from_string("moon") is Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.DEVELOPMENT


def _parse_bool(raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError("not a boolean")


class Config:
    """
    Settings snapshot.

    >>> Config.REDIS_MAX_CONNECTIONS
    50
    """

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: Optional[str] = None
    REDIS_MAX_CONNECTIONS: int = 50
    REDIS_SOCKET_TIMEOUT: int = 5

    ENVIRONMENT: str = Environment.DEVELOPMENT.value
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None

    _validation_errors: Dict[str, str] = {}

    @classmethod
    def _read(
        cls,
        key: str,
        default: T,
        parse: Callable[[str], T],
        check: Optional[Callable[[T], bool]] = None,
    ) -> T:
        """Parse ``$key``; on a parse or range failure keep `default` and record why."""
        raw = os.getenv(key)
        if raw is None or raw == "":
            return default
        try:
            value = parse(raw)
        except ValueError:
            return cls._reject(key, raw, default)
        if check is not None and not check(value):
            return cls._reject(key, raw, default)
        return value

    @classmethod
    def _reject(cls, key: str, raw: str, default: Any) -> Any:
        message = f"{key}={raw!r} is invalid, using default {default!r}"
        cls._validation_errors[key] = message
        # The rediskit handler may not be installed yet; this goes to the root logger
        logging.getLogger(__name__).warning(message)
        return default

    @classmethod
    def load(cls) -> None:
        cls._validation_errors = {}

        cls.REDIS_URL = cls._read("REDIS_URL", "redis://localhost:6379/0", str)
        cls.REDIS_PASSWORD = cls._read("REDIS_PASSWORD", None, str)
        cls.REDIS_MAX_CONNECTIONS = cls._read(
            "REDIS_MAX_CONNECTIONS", 50, int, lambda v: 1 <= v <= 500
        )
        cls.REDIS_SOCKET_TIMEOUT = cls._read(
            "REDIS_SOCKET_TIMEOUT", 5, int, lambda v: 1 <= v <= 60
        )

        cls.ENVIRONMENT = Environment.from_string(
            cls._read("ENVIRONMENT", "development", str)
        ).value
        cls.LOG_LEVEL = cls._read(
            "LOG_LEVEL", "INFO", lambda raw: raw.strip().upper(), lambda v: v in _LOG_LEVELS
        )
        cls.LOG_JSON = cls._read("LOG_JSON", None, _parse_bool)

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT == Environment.TESTING.value

    @classmethod
    def get_validation_errors(cls) -> Dict[str, str]:
        """Settings that were present but rejected during the last load."""
        return dict(cls._validation_errors)

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """Non-sensitive view for status endpoints; never includes the password."""
        return {
            "environment": cls.ENVIRONMENT,
            "log_level": cls.LOG_LEVEL,
            "redis_url_scheme": cls.REDIS_URL.split("://")[0] if "://" in cls.REDIS_URL else "unknown",
            "redis_max_connections": cls.REDIS_MAX_CONNECTIONS,
            "redis_socket_timeout": cls.REDIS_SOCKET_TIMEOUT,
            "redis_password_set": bool(cls.REDIS_PASSWORD),
        }


Config.load()
