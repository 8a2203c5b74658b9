"""
Distributed lock acquisition via ``SET key value EX|PX expire NX``.

Purpose
-------
Attempt, in exactly one round trip, to create a key with a value and an
expiry only if the key does not exist yet. The boolean outcome is the whole
result: the client keeps no record of held locks.

Architecture Notes
------------------
- Second-granularity (`set_nx_ex`) and millisecond-granularity (`set_nx_px`)
  entry points share one implementation
- An empty value is rejected locally with `LockValueError`
- `expire` is sent as given; the server decides whether it is acceptable
- A nil reply means another holder owns the key: returns False, not an error
- No retry, backoff, renewal or release. Callers needing release should
  compare-and-delete by value themselves
"""

from __future__ import annotations

from typing import Any, List

from rediskit.core.exceptions import LockValueError
from rediskit.core.logging.logger import get_logger
from rediskit.core.redis.coercion import WireValue, is_empty_wire, pack_args, to_wire
from rediskit.core.redis.commands import CommandsBase
from rediskit.core.redis.constants import EX_SECONDS, NOT_EXISTS, PX_MILLISECONDS
from rediskit.core.redis.executor import ABSENT, execute_optional
from rediskit.core.redis.metrics import RedisMetrics
from rediskit.core.redis.replies import as_ok

logger = get_logger(__name__)


def build_lock_args(key: str, value: Any, expire: int, unit: str) -> List[WireValue]:
    """
    Build ``key value unit expire NX``, validating the value first.

    >>> build_lock_args("job:7", "worker-a", 30, "EX")
    ['job:7', 'worker-a', 'EX', '30', 'NX']
    """
    wire_value = to_wire(value)
    if is_empty_wire(wire_value):
        raise LockValueError(key)
    return [*pack_args(key), wire_value, *pack_args(unit, expire, NOT_EXISTS)]


class LockCommands(CommandsBase):
    """Single-shot lock acquisition."""

    def set_nx_ex(self, key: str, value: Any, expire: int) -> bool:
        """
        Try to take lock `key` for `expire` seconds.

        Returns
        -------
        bool
            True if the key was created, False if it already existed.

        Raises
        ------
        LockValueError
            If `value` is empty (no command is sent).
        """
        return self._try_lock(key, value, expire, EX_SECONDS)

    def set_nx_px(self, key: str, value: Any, expire: int) -> bool:
        """Try to take lock `key` for `expire` milliseconds. See `set_nx_ex`."""
        return self._try_lock(key, value, expire, PX_MILLISECONDS)

    def _try_lock(self, key: str, value: Any, expire: int, unit: str) -> bool:
        args = build_lock_args(key, value, expire, unit)

        reply = execute_optional(self._executor, "SET", *args)
        acquired = reply is not ABSENT and as_ok("SET", reply.value)

        RedisMetrics.record_lock_acquisition(acquired)
        logger.debug(
            "Redis lock attempt",
            extra={
                "lock_key": key,
                "expire": expire,
                "unit": unit,
                "acquired": acquired,
            },
        )
        return acquired
