"""
Scalar-to-wire coercion and command argument packing.

The set of supported value types is closed: ``int``, ``float``, ``str`` and
byte sequences (``bytes``, ``bytearray``, ``memoryview``). Anything else,
including ``bool`` and ``None``, raises `UnsupportedValueError` before a
command is sent.
"""

from __future__ import annotations

from typing import Any, List, Union

from rediskit.core.exceptions import UnsupportedValueError

WireValue = Union[str, bytes]


def to_wire(value: Any) -> WireValue:
    """
    Convert a supported scalar into its wire representation.

    >>> to_wire(42)
    '42'
    >>> to_wire(2.5)
    '2.5'
    >>> to_wire(float("-inf"))
    '-inf'
    >>> to_wire(b"raw")
    b'raw'
    """
    # bool is an int subclass; "True" is never a meaningful Redis value
    if isinstance(value, bool):
        raise UnsupportedValueError(value)
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise UnsupportedValueError(value)


def pack_args(*parts: Any) -> List[WireValue]:
    """
    Build a command argument list, flattening list/tuple parts one level.

    >>> pack_args("key", ["f1", "f2"], 3)
    ['key', 'f1', 'f2', '3']
    """
    args: List[WireValue] = []
    for part in parts:
        if isinstance(part, (list, tuple)):
            args.extend(to_wire(item) for item in part)
        else:
            args.append(to_wire(part))
    return args


def is_empty_wire(value: WireValue) -> bool:
    return len(value) == 0
