"""
Redis access layer for rediskit.

Exports
-------
Client:
    RedisClient - hash, sorted-set and lock commands over one executor
    RedisService - process-wide client built from Config

Execution:
    CommandExecutor - protocol: execute(command, *args) -> raw reply
    RedisExecutor - redis-py backed executor
    Found, ABSENT, execute_optional - nil-aware reply variant

Scanning:
    ScanPage, hscan, zscan, hscan_iter, zscan_iter

Building blocks:
    fetch_fields, chunked - chunked HMGET
    build_lock_args, build_range_args, build_range_by_score_args,
    build_store_args, build_scan_args - pure argument builders
    to_wire, pack_args - scalar coercion

Metrics:
    RedisMetrics

Example Usage
-------------
>>> client = RedisClient.from_url("redis://localhost:6379/0")
>>> client.set_nx_ex("lock:report", "worker-1", 30)
True
>>> page = client.hscan("user:1", cursor=0, match="pref:*", count=100)
>>> while not page.done:
...     page = client.hscan("user:1", cursor=page.cursor, match="pref:*", count=100)
"""

from rediskit.core.redis.batch import chunked, fetch_fields
from rediskit.core.redis.client import RedisClient
from rediskit.core.redis.coercion import pack_args, to_wire
from rediskit.core.redis.constants import HMGET_CHUNK_SIZE
from rediskit.core.redis.executor import (
    ABSENT,
    CommandExecutor,
    Found,
    RedisExecutor,
    execute_optional,
)
from rediskit.core.redis.lock import build_lock_args
from rediskit.core.redis.metrics import RedisMetrics
from rediskit.core.redis.scan import (
    ScanPage,
    build_scan_args,
    hscan,
    hscan_iter,
    zscan,
    zscan_iter,
)
from rediskit.core.redis.service import RedisService
from rediskit.core.redis.zset import (
    build_range_args,
    build_range_by_score_args,
    build_store_args,
)

__all__ = [
    "RedisClient",
    "RedisService",
    "CommandExecutor",
    "RedisExecutor",
    "Found",
    "ABSENT",
    "execute_optional",
    "ScanPage",
    "hscan",
    "zscan",
    "hscan_iter",
    "zscan_iter",
    "fetch_fields",
    "chunked",
    "HMGET_CHUNK_SIZE",
    "build_lock_args",
    "build_range_args",
    "build_range_by_score_args",
    "build_store_args",
    "build_scan_args",
    "to_wire",
    "pack_args",
    "RedisMetrics",
]
