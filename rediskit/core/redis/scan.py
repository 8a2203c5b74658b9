"""
Cursor-based incremental scanning (HSCAN / ZSCAN).

Protocol
--------
One step sends ``<CMD> key cursor [MATCH pattern] [COUNT n]`` and receives
``[cursor, [flat items...]]``. Cursor 0 as input starts an iteration; cursor
0 in a reply ends it. Any other returned cursor must be passed back verbatim.

The COUNT hint is advisory and MATCH is applied server-side after elements
are collected, so a step may legitimately return no items with a non-zero
cursor. Only cursor 0 means the iteration is finished.

Enumeration is best-effort: under concurrent mutation an element may be
returned more than once or missed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from rediskit.core.exceptions import ValidationError
from rediskit.core.redis.coercion import WireValue, pack_args
from rediskit.core.redis.constants import COUNT, MATCH, MAX_CURSOR
from rediskit.core.redis.executor import ABSENT, CommandExecutor, execute_optional
from rediskit.core.redis.replies import as_field_map, as_scan_reply, as_scored_members


@dataclass(frozen=True, slots=True)
class ScanPage:
    """
    One scan step's result.

    `items` is ``{field: value}`` for hashes and ``[(member, score), ...]``
    for sorted sets.
    """

    cursor: int
    items: Any

    @property
    def done(self) -> bool:
        return self.cursor == 0


def build_scan_args(
    key: str,
    cursor: int,
    match: Optional[str] = None,
    count: int = 0,
) -> List[WireValue]:
    if isinstance(cursor, bool) or not isinstance(cursor, int) or not 0 <= cursor <= MAX_CURSOR:
        raise ValidationError("cursor must be an unsigned 64-bit integer", cursor=cursor)

    args = pack_args(key, cursor)
    if match:
        args.extend(pack_args(MATCH, match))
    if count is not None and count > 0:
        args.extend(pack_args(COUNT, count))
    return args


def _scan(
    executor: CommandExecutor,
    command: str,
    decode_items: Callable[[str, Any], Any],
    empty: Callable[[], Any],
    key: str,
    cursor: int,
    match: Optional[str],
    count: int,
) -> ScanPage:
    reply = execute_optional(executor, command, *build_scan_args(key, cursor, match, count))
    if reply is ABSENT:
        return ScanPage(cursor=0, items=empty())
    next_cursor, flat = as_scan_reply(command, reply.value)
    return ScanPage(cursor=next_cursor, items=decode_items(command, flat))


def hscan(
    executor: CommandExecutor,
    key: str,
    cursor: int = 0,
    match: Optional[str] = None,
    count: int = 0,
) -> ScanPage:
    """
    Run one HSCAN step.

    Returns a page whose items map field names to raw values. An odd-length
    field/value payload raises `ReplyDecodeError`.
    """
    return _scan(executor, "HSCAN", as_field_map, dict, key, cursor, match, count)


def zscan(
    executor: CommandExecutor,
    key: str,
    cursor: int = 0,
    match: Optional[str] = None,
    count: int = 0,
) -> ScanPage:
    """Run one ZSCAN step; items are ``(member, score)`` pairs in reply order."""
    return _scan(executor, "ZSCAN", as_scored_members, list, key, cursor, match, count)


def iter_pages(step: Callable[[int], ScanPage]) -> Iterator[ScanPage]:
    """
    Drive `step` from cursor 0 until the server returns cursor 0.

    Empty pages with a non-zero cursor are yielded and iteration continues.
    """
    cursor = 0
    while True:
        page = step(cursor)
        yield page
        if page.done:
            return
        cursor = page.cursor


def hscan_iter(
    executor: CommandExecutor,
    key: str,
    match: Optional[str] = None,
    count: int = 0,
) -> Iterator[Tuple[str, bytes]]:
    """Yield every ``(field, value)`` of a hash across as many steps as needed."""
    for page in iter_pages(lambda c: hscan(executor, key, c, match, count)):
        items: Dict[str, bytes] = page.items
        yield from items.items()


def zscan_iter(
    executor: CommandExecutor,
    key: str,
    match: Optional[str] = None,
    count: int = 0,
) -> Iterator[Tuple[bytes, float]]:
    """Yield every ``(member, score)`` of a sorted set across as many steps as needed."""
    for page in iter_pages(lambda c: zscan(executor, key, c, match, count)):
        yield from page.items
