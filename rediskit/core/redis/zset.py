"""
Sorted-set commands: range queries, rank lookups, removals and set algebra.

Argument order is part of the wire contract. The builders below are pure
functions so the exact argument sequence can be checked without a server:

- ``ZRANGEBYSCORE key min max``; ``ZREVRANGEBYSCORE key max min``. Both
  methods take the logical ``(min, max)`` bounds, the reverse form swaps them
  on the wire.
- ``WITHSCORES`` and ``LIMIT offset count`` are appended only on request.
- ``ZUNIONSTORE|ZINTERSTORE dest numkeys key... [WEIGHTS w...] [AGGREGATE m]``.
  WEIGHTS only when weights are given, AGGREGATE only when a mode is given.
  The number of weights is not checked against the number of keys; the
  server rejects a mismatch.

Bounds (``min``/``max``) are passed through as given, so exclusive
(``"(2"``), infinite (``"-inf"``) and lexical (``"[a"``) forms all work.

Nil replies map to the natural empty value: 0 for counts and cardinality,
``[]`` for ranges, -1 for ranks and None for a missing member's score.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from rediskit.core.exceptions import ValidationError
from rediskit.core.redis import scan
from rediskit.core.redis.coercion import WireValue, pack_args
from rediskit.core.redis.commands import CommandsBase
from rediskit.core.redis.constants import AGGREGATE, LIMIT, WEIGHTS, WITHSCORES
from rediskit.core.redis.replies import (
    as_bytes_list,
    as_float,
    as_int,
    as_scored_members,
)

Bound = Union[str, int, float]
RangeResult = Union[List[bytes], List[Tuple[bytes, float]]]


# ═════════════════════════════════════════════════════════════════════════════
# ARGUMENT BUILDERS
# ═════════════════════════════════════════════════════════════════════════════


def build_range_args(
    key: str,
    start: int,
    stop: int,
    withscores: bool = False,
) -> List[WireValue]:
    args = pack_args(key, start, stop)
    if withscores:
        args.append(WITHSCORES)
    return args


def build_range_by_score_args(
    key: str,
    min: Bound,
    max: Bound,
    withscores: bool = False,
    offset: Optional[int] = None,
    count: Optional[int] = None,
    reverse: bool = False,
) -> List[WireValue]:
    """
    >>> build_range_by_score_args("k", "-inf", "(2")
    ['k', '-inf', '(2']
    >>> build_range_by_score_args("k", "-inf", "(2", reverse=True)
    ['k', '(2', '-inf']
    """
    if (offset is None) != (count is None):
        raise ValidationError("offset and count must be given together", key=key)

    args = pack_args(key, max, min) if reverse else pack_args(key, min, max)
    if withscores:
        args.append(WITHSCORES)
    if offset is not None:
        args.extend(pack_args(LIMIT, offset, count))
    return args


def build_store_args(
    destination: str,
    keys: Sequence[str],
    weights: Optional[Sequence[Union[int, float]]] = None,
    aggregate: str = "",
) -> List[WireValue]:
    """
    >>> build_store_args("dest", ["a", "b"], [2, 3], "SUM")
    ['dest', '2', 'a', 'b', 'WEIGHTS', '2', '3', 'AGGREGATE', 'SUM']
    """
    args = pack_args(destination, len(keys), list(keys))
    if weights:
        args.append(WEIGHTS)
        args.extend(pack_args(list(weights)))
    if aggregate:
        args.extend(pack_args(AGGREGATE, aggregate))
    return args


# ═════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═════════════════════════════════════════════════════════════════════════════


class SortedSetCommands(CommandsBase):
    def _range(self, command: str, args: List[WireValue], withscores: bool) -> RangeResult:
        decode = as_scored_members if withscores else as_bytes_list
        return self._call_or([], command, decode, args)

    def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        """
        Add members with scores; existing members get their score updated.

        Returns the number of members newly added (updates are not counted).
        """
        if not mapping:
            raise ValidationError("mapping must not be empty", key=key)
        flat: List[Any] = []
        for member, score in mapping.items():
            flat.extend((score, member))
        return self._call("ZADD", as_int, key, flat)

    def zscore(self, key: str, member: str) -> Optional[float]:
        """
        Score of `member`, or None when the key or member does not exist.

        None rather than 0.0 keeps a missing member distinct from one whose
        score really is 0.
        """
        return self._call_or(None, "ZSCORE", as_float, key, member)

    def zincrby(self, key: str, delta: float, member: str) -> float:
        return self._call("ZINCRBY", as_float, key, delta, member)

    def zcard(self, key: str) -> int:
        return self._call_or(0, "ZCARD", as_int, key)

    def zcount(self, key: str, min: Bound, max: Bound) -> int:
        """Members with min <= score <= max (bounds may be exclusive, e.g. ``"(1"``)."""
        return self._call_or(0, "ZCOUNT", as_int, key, min, max)

    def zlexcount(self, key: str, min: str, max: str) -> int:
        """Members between lexical bounds, for sets whose scores are all equal."""
        return self._call_or(0, "ZLEXCOUNT", as_int, key, min, max)

    def zrange(self, key: str, start: int, stop: int, withscores: bool = False) -> RangeResult:
        """
        Members ranked start..stop inclusive, lowest score first.

        Ranks are zero-based; negative values count from the end. With
        `withscores` the result is a list of ``(member, score)`` pairs.
        """
        return self._range("ZRANGE", build_range_args(key, start, stop, withscores), withscores)

    def zrevrange(self, key: str, start: int, stop: int, withscores: bool = False) -> RangeResult:
        """Like `zrange`, highest score first."""
        return self._range("ZREVRANGE", build_range_args(key, start, stop, withscores), withscores)

    def zrangebyscore(
        self,
        key: str,
        min: Bound,
        max: Bound,
        withscores: bool = False,
        offset: Optional[int] = None,
        count: Optional[int] = None,
    ) -> RangeResult:
        args = build_range_by_score_args(key, min, max, withscores, offset, count)
        return self._range("ZRANGEBYSCORE", args, withscores)

    def zrevrangebyscore(
        self,
        key: str,
        min: Bound,
        max: Bound,
        withscores: bool = False,
        offset: Optional[int] = None,
        count: Optional[int] = None,
    ) -> RangeResult:
        """Members with scores in [min, max], highest first. Sends max before min."""
        args = build_range_by_score_args(key, min, max, withscores, offset, count, reverse=True)
        return self._range("ZREVRANGEBYSCORE", args, withscores)

    def zrank(self, key: str, member: str) -> int:
        """Zero-based ascending rank, or -1 if `member` is not in the set."""
        return self._call_or(-1, "ZRANK", as_int, key, member)

    def zrevrank(self, key: str, member: str) -> int:
        """Zero-based descending rank, or -1 if `member` is not in the set."""
        return self._call_or(-1, "ZREVRANK", as_int, key, member)

    def zrem(self, key: str, *members: str) -> int:
        return self._call_or(0, "ZREM", as_int, key, list(members))

    def zremrangebyrank(self, key: str, start: int, stop: int) -> int:
        return self._call_or(0, "ZREMRANGEBYRANK", as_int, key, start, stop)

    def zremrangebyscore(self, key: str, min: Bound, max: Bound) -> int:
        return self._call_or(0, "ZREMRANGEBYSCORE", as_int, key, min, max)

    def zremrangebylex(self, key: str, min: str, max: str) -> int:
        return self._call_or(0, "ZREMRANGEBYLEX", as_int, key, min, max)

    def zunionstore(
        self,
        destination: str,
        keys: Sequence[str],
        weights: Optional[Sequence[Union[int, float]]] = None,
        aggregate: str = "",
    ) -> int:
        """Store the union of `keys` in `destination`; returns its cardinality."""
        return self._call_or(
            0, "ZUNIONSTORE", as_int, build_store_args(destination, keys, weights, aggregate)
        )

    def zinterstore(
        self,
        destination: str,
        keys: Sequence[str],
        weights: Optional[Sequence[Union[int, float]]] = None,
        aggregate: str = "",
    ) -> int:
        """Store the intersection of `keys` in `destination`; returns its cardinality."""
        return self._call_or(
            0, "ZINTERSTORE", as_int, build_store_args(destination, keys, weights, aggregate)
        )

    def zscan(
        self,
        key: str,
        cursor: int = 0,
        match: Optional[str] = None,
        count: int = 0,
    ) -> scan.ScanPage:
        return scan.zscan(self._executor, key, cursor, match, count)

    def zscan_iter(
        self,
        key: str,
        match: Optional[str] = None,
        count: int = 0,
    ) -> Iterator[Tuple[bytes, float]]:
        return scan.zscan_iter(self._executor, key, match, count)
