"""
Hash commands.

Thin, typed wrappers over the hash command family. Replies that can be nil
for a missing key or field map to the natural empty value: None for a single
value, an empty list/dict, 0, or False.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from rediskit.core.exceptions import ValidationError
from rediskit.core.redis.batch import fetch_fields
from rediskit.core.redis.commands import CommandsBase
from rediskit.core.redis.replies import (
    as_bool,
    as_bytes,
    as_bytes_list,
    as_field_map,
    as_int,
    as_ok,
)
from rediskit.core.redis import scan


class HashCommands(CommandsBase):
    def hset(self, key: str, field: str, value: Any) -> int:
        """Set one field. Returns 1 if the field is new, 0 if it was updated."""
        return self._call("HSET", as_int, key, field, value)

    def hget(self, key: str, field: str) -> Optional[bytes]:
        return self._call_or(None, "HGET", as_bytes, key, field)

    def hmget(self, key: str, *fields: str) -> List[Optional[bytes]]:
        """
        Get many fields, chunked into HMGET requests of at most 32 fields.

        The result is aligned with `fields`; missing fields are None.
        """
        return fetch_fields(self._executor, key, fields)

    def hmset(self, key: str, mapping: Mapping[str, Any]) -> None:
        if not mapping:
            raise ValidationError("mapping must not be empty", key=key)
        flat: List[Any] = []
        for field, value in mapping.items():
            flat.extend((field, value))
        self._call("HMSET", as_ok, key, flat)

    def hkeys(self, key: str) -> List[bytes]:
        return self._call_or([], "HKEYS", as_bytes_list, key)

    def hgetall(self, key: str) -> Dict[str, bytes]:
        return self._call_or({}, "HGETALL", as_field_map, key)

    def hlen(self, key: str) -> int:
        return self._call_or(0, "HLEN", as_int, key)

    def hvals(self, key: str) -> List[bytes]:
        return self._call_or([], "HVALS", as_bytes_list, key)

    def hincrby(self, key: str, field: str, delta: int) -> int:
        """Increment an integer field, creating it at 0 first if missing."""
        return self._call("HINCRBY", as_int, key, field, delta)

    def hexists(self, key: str, field: str) -> bool:
        return self._call_or(False, "HEXISTS", as_bool, key, field)

    def hdel(self, key: str, *fields: str) -> int:
        """Delete fields; returns how many existed."""
        return self._call_or(0, "HDEL", as_int, key, list(fields))

    def hscan(
        self,
        key: str,
        cursor: int = 0,
        match: Optional[str] = None,
        count: int = 0,
    ) -> scan.ScanPage:
        """
        One HSCAN step. Keep calling with the returned cursor until it is 0;
        an empty page does not mean the scan is over.
        """
        return scan.hscan(self._executor, key, cursor, match, count)

    def hscan_iter(
        self,
        key: str,
        match: Optional[str] = None,
        count: int = 0,
    ) -> Iterator[Tuple[str, bytes]]:
        return scan.hscan_iter(self._executor, key, match, count)
