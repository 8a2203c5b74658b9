"""RedisClient: hash, sorted-set and lock commands over one executor."""

from __future__ import annotations

from typing import Any

from rediskit.core.redis.executor import CommandExecutor, RedisExecutor
from rediskit.core.redis.hash import HashCommands
from rediskit.core.redis.lock import LockCommands
from rediskit.core.redis.zset import SortedSetCommands


class RedisClient(HashCommands, SortedSetCommands, LockCommands):
    """
    Typed access to a Redis-compatible store.

    Stateless apart from the executor: every method is one (or, for
    `hmget`, a sequence of) round trips. Safe to share between threads when
    the executor is.

    Example
    -------
    >>> client = RedisClient.from_url("redis://localhost:6379/0")
    >>> client.zadd("board", {"alice": 10, "bob": 7})
    2
    >>> client.zrevrange("board", 0, 0, withscores=True)
    [(b'alice', 10.0)]
    """

    def __init__(self, executor: CommandExecutor) -> None:
        super().__init__(executor)

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisClient":
        """Build a client over a new redis-py connection pool."""
        return cls(RedisExecutor.from_url(url, **kwargs))
