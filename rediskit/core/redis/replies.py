"""
Shape-validating decoders for raw RESP replies.

Every decoder checks the reply's structure before interpreting its contents
and raises `ReplyDecodeError` on violation. Nothing is truncated or coerced
silently. Nil replies never reach these functions; callers collapse them to
the operation's zero value first (see `executor.execute_optional`).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from rediskit.core.exceptions import ReplyDecodeError
from rediskit.core.redis.constants import MAX_CURSOR, OK_REPLY


def as_int(command: str, raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ReplyDecodeError(command, "expected integer reply", raw)
    return raw


def as_bool(command: str, raw: Any) -> bool:
    value = as_int(command, raw)
    if value not in (0, 1):
        raise ReplyDecodeError(command, f"expected 0 or 1, got {value}", raw)
    return value == 1


def as_bytes(command: str, raw: Any) -> bytes:
    if isinstance(raw, bytes):
        return raw
    if isinstance(raw, str):
        return raw.encode("utf-8")
    raise ReplyDecodeError(command, "expected bulk string reply", raw)


def as_float(command: str, raw: Any) -> float:
    if isinstance(raw, float):
        return raw
    try:
        return float(as_bytes(command, raw))
    except ValueError as exc:
        raise ReplyDecodeError(command, f"invalid float {raw!r}", raw) from exc


def as_ok(command: str, raw: Any) -> bool:
    if as_bytes(command, raw) != OK_REPLY:
        raise ReplyDecodeError(command, f"expected OK, got {raw!r}", raw)
    return True


def as_list(command: str, raw: Any) -> List[Any]:
    if not isinstance(raw, (list, tuple)):
        raise ReplyDecodeError(command, "expected array reply", raw)
    return list(raw)


def as_bytes_list(command: str, raw: Any) -> List[bytes]:
    return [as_bytes(command, item) for item in as_list(command, raw)]


def as_pairs(command: str, raw: Any) -> List[Tuple[Any, Any]]:
    """Split a flat ``[a1, b1, a2, b2, ...]`` array into pairs; odd length is an error."""
    items = as_list(command, raw)
    if len(items) % 2 != 0:
        raise ReplyDecodeError(
            command, f"expected even number of elements, got {len(items)}", raw
        )
    return list(zip(items[0::2], items[1::2]))


def as_field_map(command: str, raw: Any) -> Dict[str, bytes]:
    """Decode a flat field/value array into ``{field: value}``."""
    return {
        as_bytes(command, field).decode("utf-8", errors="surrogateescape"): as_bytes(command, value)
        for field, value in as_pairs(command, raw)
    }


def as_scored_members(command: str, raw: Any) -> List[Tuple[bytes, float]]:
    """Decode a flat member/score array into ``[(member, score), ...]``."""
    return [
        (as_bytes(command, member), as_float(command, score))
        for member, score in as_pairs(command, raw)
    ]


def as_cursor(command: str, raw: Any) -> int:
    token = as_bytes(command, raw)
    try:
        cursor = int(token, 10)
    except ValueError as exc:
        raise ReplyDecodeError(command, f"invalid cursor {token!r}", raw) from exc
    if not 0 <= cursor <= MAX_CURSOR:
        raise ReplyDecodeError(command, f"cursor out of range: {cursor}", raw)
    return cursor


def as_scan_reply(command: str, raw: Any) -> Tuple[int, List[Any]]:
    """Validate a ``[cursor, [items...]]`` scan reply."""
    parts = as_list(command, raw)
    if len(parts) != 2:
        raise ReplyDecodeError(
            command, f"expected 2-element scan reply, got {len(parts)}", raw
        )
    return as_cursor(command, parts[0]), as_list(command, parts[1])
