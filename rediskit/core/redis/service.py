"""
RedisService: process-wide Redis client for rediskit applications

Purpose
-------
Build one pooled `RedisClient` from static configuration, verify the
connection, and expose it together with health and status reporting.

Responsibilities
----------------
- Initialize and manage a singleton redis-py connection pool
- Provide the shared `RedisClient`
- Report health (PING) and a status snapshot including metrics

Non-Responsibilities
--------------------
- Command semantics (RedisClient and the command modules)
- Retries, reconnection policy, failover (redis-py / the caller)

Configuration Keys
------------------
- REDIS_URL             : str (default "redis://localhost:6379/0")
- REDIS_PASSWORD        : str (optional)
- REDIS_SOCKET_TIMEOUT  : int seconds (default 5)
- REDIS_MAX_CONNECTIONS : int (default 50)

Architecture Notes
------------------
- Initialization is idempotent and thread-safe via threading.Lock
- Replies are never decoded; callers receive bytes
"""

from __future__ import annotations

import threading
import time
from typing import Any, Dict, Optional

from redis.exceptions import RedisError

from rediskit.core.config import Config
from rediskit.core.config.errors import ConfigValidationError
from rediskit.core.logging.logger import get_logger
from rediskit.core.redis.client import RedisClient
from rediskit.core.redis.executor import RedisExecutor
from rediskit.core.redis.metrics import RedisMetrics

logger = get_logger(__name__)


class RedisService:
    """Singleton owner of the shared `RedisClient`."""

    _executor: Optional[RedisExecutor] = None
    _client: Optional[RedisClient] = None
    _init_lock = threading.Lock()
    _is_healthy: bool = False

    # ═══════════════════════════════════════════════════════════════════════
    # LIFECYCLE MANAGEMENT
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def initialize(cls, url: Optional[str] = None) -> RedisClient:
        """
        Create the shared client and verify it with PING.

        Idempotent. Safe to call from several threads.

        Raises
        ------
        ConfigValidationError
            If the Redis URL is not a redis://, rediss:// or unix:// URL.
        RuntimeError
            If the connection cannot be established.
        """
        if cls._client is not None:
            logger.debug("RedisService already initialized, skipping")
            return cls._client

        with cls._init_lock:
            if cls._client is not None:
                return cls._client

            url = url or Config.REDIS_URL
            scheme = url.split("://")[0] if "://" in url else "unknown"
            if scheme not in {"redis", "rediss", "unix"}:
                raise ConfigValidationError("REDIS_URL", f"unsupported scheme '{scheme}'")

            options: Dict[str, Any] = {
                "socket_timeout": Config.REDIS_SOCKET_TIMEOUT,
                "max_connections": Config.REDIS_MAX_CONNECTIONS,
            }
            if Config.REDIS_PASSWORD:
                options["password"] = Config.REDIS_PASSWORD

            start_time = time.monotonic()
            executor = RedisExecutor.from_url(url, **options)

            try:
                if not executor.ping():
                    raise RuntimeError("PING did not return PONG")
            except (RedisError, RuntimeError) as exc:
                executor.close()
                cls._is_healthy = False
                logger.critical(
                    "Failed to initialize RedisService",
                    extra={
                        "error": str(exc),
                        "error_type": type(exc).__name__,
                        "url_scheme": scheme,
                    },
                    exc_info=True,
                )
                raise RuntimeError(f"Failed to initialize RedisService: {exc}") from exc

            cls._executor = executor
            cls._client = RedisClient(executor)
            cls._is_healthy = True

            logger.info(
                "RedisService initialized successfully",
                extra={
                    "url_scheme": scheme,
                    "socket_timeout_seconds": options["socket_timeout"],
                    "max_connections": options["max_connections"],
                    "initialization_time_ms": round((time.monotonic() - start_time) * 1000, 2),
                },
            )
            return cls._client

    @classmethod
    def shutdown(cls) -> None:
        """Close the connection pool. Safe to call even if not initialized."""
        with cls._init_lock:
            executor = cls._executor
            cls._executor = None
            cls._client = None
            cls._is_healthy = False

        if executor is None:
            logger.debug("RedisService not initialized, nothing to shutdown")
            return

        executor.close()
        logger.info("RedisService shutdown complete")

    # ═══════════════════════════════════════════════════════════════════════
    # ACCESS
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def client(cls) -> RedisClient:
        """
        Return the shared client.

        Raises
        ------
        RuntimeError
            If RedisService has not been initialized.
        """
        if cls._client is None:
            raise RuntimeError(
                "RedisService not initialized. "
                "Call `RedisService.initialize()` first."
            )
        return cls._client

    # ═══════════════════════════════════════════════════════════════════════
    # HEALTH & STATUS
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def health_check(cls) -> bool:
        """Verify connectivity via PING. Never raises."""
        if cls._executor is None:
            logger.warning("Health check failed: RedisService not initialized")
            cls._is_healthy = False
            return False

        try:
            cls._is_healthy = cls._executor.ping()
        except RedisError as exc:
            cls._is_healthy = False
            logger.error(
                "Redis health check failed",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
        return cls._is_healthy

    @classmethod
    def is_healthy(cls) -> bool:
        """Return cached health status without performing I/O."""
        return cls._is_healthy

    @classmethod
    def get_status(cls) -> Dict[str, Any]:
        return {
            "initialized": cls._client is not None,
            "healthy": cls._is_healthy,
            "config": Config.get_config_summary(),
            "metrics": RedisMetrics.get_summary(),
        }
