"""
Batched multi-field retrieval for Redis hashes.

Purpose
-------
Fetch an arbitrarily long list of hash fields without exceeding server
command-line and reply-size limits, by splitting the list into bounded
HMGET requests.

Architecture Notes
------------------
- Chunks hold at most HMGET_CHUNK_SIZE (32) fields; the last may be shorter
- Chunks are sent strictly in sequence and their replies concatenated in
  order, so result position i always corresponds to input field i
- Any chunk failure aborts the whole fetch; no partial results are returned
- An empty field list returns immediately without a network call
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, TypeVar

from rediskit.core.exceptions import ReplyDecodeError, ValidationError
from rediskit.core.logging.logger import get_logger
from rediskit.core.redis.coercion import pack_args
from rediskit.core.redis.constants import HMGET_CHUNK_SIZE
from rediskit.core.redis.executor import CommandExecutor
from rediskit.core.redis.replies import as_bytes, as_list

logger = get_logger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """
    Yield consecutive slices of at most `size` items.

    >>> [list(c) for c in chunked("abcde", 2)]
    [['a', 'b'], ['c', 'd'], ['e']]
    """
    if size <= 0:
        raise ValidationError("chunk size must be positive", chunk_size=size)
    for start in range(0, len(items), size):
        yield items[start:start + size]


def fetch_fields(
    executor: CommandExecutor,
    key: str,
    fields: Sequence[str],
    chunk_size: int = HMGET_CHUNK_SIZE,
) -> List[Optional[bytes]]:
    """
    Fetch `fields` of hash `key`, one HMGET per chunk.

    Parameters
    ----------
    executor : CommandExecutor
        Command executor to run each HMGET on
    key : str
        Hash key
    fields : Sequence[str]
        Fields to fetch; duplicates allowed
    chunk_size : int
        Maximum fields per request

    Returns
    -------
    List[Optional[bytes]]
        One entry per input field, in input order; None for missing fields

    Raises
    ------
    ReplyDecodeError
        If a chunk reply does not hold exactly one element per field
    """
    if not fields:
        return []

    result: List[Optional[bytes]] = []
    chunk_count = 0
    for chunk in chunked(fields, chunk_size):
        reply = as_list("HMGET", executor.execute("HMGET", *pack_args(key, list(chunk))))
        if len(reply) != len(chunk):
            raise ReplyDecodeError(
                "HMGET",
                f"expected {len(chunk)} values, got {len(reply)}",
                reply,
            )
        result.extend(None if value is None else as_bytes("HMGET", value) for value in reply)
        chunk_count += 1

    logger.debug(
        "Batch HMGET completed",
        extra={
            "key": key,
            "field_count": len(fields),
            "chunks": chunk_count,
            "found_count": sum(1 for v in result if v is not None),
        },
    )
    return result
