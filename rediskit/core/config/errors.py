"""
Configuration error hierarchy for rediskit.

Exception Hierarchy
-------------------
ConfigError (base)
└── ConfigValidationError (a value is missing or cannot be used)
"""

from rediskit.core.exceptions import AppError, ErrorCode


class ConfigError(AppError):
    """
    Base exception for all configuration-related errors.

    Example
    -------
    >>> try:
    ...     RedisService.initialize()
    ... except ConfigError as e:
    ...     logger.error(f"Config problem: {e}")
    """

    DEFAULT_CODE = ErrorCode.SYSTEM_ERROR

    def __init__(self, config_key: str, message: str) -> None:
        super().__init__(
            ErrorCode.SYSTEM_ERROR,
            f"Configuration error for {config_key}: {message}",
            details={"config_key": config_key},
        )
        self.config_key = config_key


class ConfigValidationError(ConfigError):
    """Raised when a configuration value cannot be used (e.g. malformed URL)."""


__all__ = [
    "ConfigError",
    "ConfigValidationError",
]
