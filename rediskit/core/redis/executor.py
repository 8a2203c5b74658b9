"""
Command execution boundary between rediskit and redis-py.

Purpose
-------
Define the single operation every rediskit component depends on:
``execute(command, *args) -> raw reply``. The production implementation,
`RedisExecutor`, runs the command through a synchronous redis-py client with
response callbacks disabled so replies arrive in raw RESP2 shape
(``int``, ``bytes``, ``None``, nested ``list``). RESP3 replies with maps
and nested score pairs instead of flat arrays, so clients on any other
protocol are refused.

Responsibilities
----------------
- Forward one command per call; no retries, no pipelining
- Record per-command latency/success in RedisMetrics
- Log completion at DEBUG and failures at ERROR with structured context
- Propagate redis-py errors unchanged

Non-Responsibilities
--------------------
- Connection pooling, reconnection, wire encoding (redis-py)
- Reply interpretation (replies.py and the command modules)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from redis import Redis
from redis.exceptions import RedisError

from rediskit.core.exceptions import ValidationError
from rediskit.core.logging.logger import get_logger
from rediskit.core.redis.constants import RESP2
from rediskit.core.redis.metrics import RedisMetrics

logger = get_logger(__name__)


class CommandExecutor(Protocol):
    """Anything that can run one Redis command and return its raw reply."""

    def execute(self, command: str, *args: Any) -> Any: ...


# ═════════════════════════════════════════════════════════════════════════════
# REPLY VARIANT
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Found:
    """A non-nil reply."""

    value: Any


class Absent:
    """The server's nil reply: no such key, field or member."""

    _instance: Optional["Absent"] = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()

Reply = Union[Found, Absent]


def execute_optional(executor: CommandExecutor, command: str, *args: Any) -> Reply:
    """Run a command, collapsing a nil reply into `ABSENT`."""
    raw = executor.execute(command, *args)
    if raw is None:
        return ABSENT
    return Found(raw)


# ═════════════════════════════════════════════════════════════════════════════
# REDIS-PY EXECUTOR
# ═════════════════════════════════════════════════════════════════════════════


class RedisExecutor:
    """
    `CommandExecutor` backed by a synchronous ``redis.Redis`` client.

    The executor takes ownership of the client: its response callbacks are
    cleared so command replies are not reshaped by redis-py. The client must
    speak RESP2 (``protocol=2``); anything else raises `ValidationError`.
    Safe for use from multiple threads; concurrency is handled by the
    client's pool.

    Example
    -------
    >>> executor = RedisExecutor.from_url("redis://localhost:6379/0")
    >>> executor.execute("HGET", "user:1", "name")
    b'alice'
    """

    def __init__(self, client: Redis) -> None:
        protocol = client.connection_pool.connection_kwargs.get("protocol")
        if protocol is None or int(protocol) != RESP2:
            raise ValidationError(
                "client must be created with protocol=2",
                protocol=protocol,
            )
        self._client = client
        self._client.response_callbacks.clear()

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisExecutor":
        """Build an executor over a new pooled RESP2 client. Replies are never decoded."""
        kwargs["decode_responses"] = False
        kwargs["protocol"] = RESP2
        return cls(Redis.from_url(url, **kwargs))

    @property
    def client(self) -> Redis:
        return self._client

    def execute(self, command: str, *args: Any) -> Any:
        start_time = time.monotonic()
        try:
            reply = self._client.execute_command(command, *args)
        except RedisError as exc:
            latency_ms = (time.monotonic() - start_time) * 1000
            RedisMetrics.record_operation(command, latency_ms, success=False)
            logger.error(
                "Redis command failed",
                extra={
                    "command": command,
                    "arg_count": len(args),
                    "latency_ms": round(latency_ms, 2),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        latency_ms = (time.monotonic() - start_time) * 1000
        RedisMetrics.record_operation(command, latency_ms, success=True)
        logger.debug(
            "Redis command",
            extra={
                "command": command,
                "arg_count": len(args),
                "nil_reply": reply is None,
                "latency_ms": round(latency_ms, 2),
            },
        )
        return reply

    def ping(self) -> bool:
        return self.execute("PING") == b"PONG"

    def close(self) -> None:
        self._client.close()
