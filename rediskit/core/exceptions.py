"""
Application exceptions for rediskit.

Purpose
-------
Define the structured exception hierarchy shared by every rediskit component:
a coded application error with cause wrapping, local validation failures, and
reply decode failures.

Design Notes
------------
- All rediskit exceptions inherit from `AppError`.
- Each exception carries:
  - `code`: stable numeric kind (`ErrorCode`)
  - `message`: human-readable description
  - `details`: additional structured context (dict)
  - `cause`: optional wrapped exception (also set as `__cause__`)
- Equality is defined by `code` only; two errors with different messages but
  the same code compare equal.
- Transport/protocol failures are NOT wrapped here; redis-py's `RedisError`
  propagates unchanged to the caller.
- Absent values (nil replies) are never represented as exceptions.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    """Standard error codes."""

    SUCCESS = 0
    PARAM_ERROR = 1
    SYSTEM_ERROR = 2
    USER_NOT_LOGIN = 3
    INVALID_REQUEST = 6
    DEFAULT_ERROR = 100  # Uncategorised errors are reported with this code
    CUSTOM_ERROR = 101  # Free-form message, no fixed text


ERROR_MESSAGES: Dict[int, str] = {
    ErrorCode.PARAM_ERROR: "invalid request parameter",
    ErrorCode.SYSTEM_ERROR: "internal service error, please retry later",
    ErrorCode.USER_NOT_LOGIN: "user session expired, please log in again",
    ErrorCode.INVALID_REQUEST: "invalid request, please retry later",
    ErrorCode.DEFAULT_ERROR: "service unavailable, please retry later",
}


class AppError(Exception):
    """
    Base exception for all rediskit errors.

    Args:
        code: Numeric error kind
        message: Human-readable error message
        details: Additional structured data about the error
        cause: Underlying exception, if any

    Example:
        >>> err = AppError(ErrorCode.PARAM_ERROR, "bad key")
        >>> err == AppError(ErrorCode.PARAM_ERROR, "other text")
        True
    """

    DEFAULT_CODE: int = ErrorCode.DEFAULT_ERROR

    def __init__(
        self,
        code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.code: int = int(code if code is not None else self.DEFAULT_CODE)
        self.message: str = (
            message if message is not None else ERROR_MESSAGES.get(self.code, "")
        )
        self.details: Dict[str, Any] = details or {}
        self.cause: Optional[BaseException] = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AppError):
            return self.code == other.code
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)

    def matches(self, exc: Optional[BaseException]) -> bool:
        """
        Check whether the first AppError in `exc`'s cause chain has this code.

        Chains with no AppError never match.
        """
        seen = set()
        while exc is not None and id(exc) not in seen:
            if isinstance(exc, AppError):
                return exc.code == self.code
            seen.add(id(exc))
            exc = exc.__cause__
        return False

    # ------------------------------------------------------------------
    # Derivation helpers (all return copies; self is never mutated)
    # ------------------------------------------------------------------

    def format(self, *args: Any) -> "AppError":
        """Return a copy whose message is `self.message % args`."""
        derived = self._copy()
        derived.message = self.message % args if args else self.message
        derived.args = (derived.message,)
        return derived

    def wrap(self, cause: Optional[BaseException]) -> Optional["AppError"]:
        """
        Return a copy carrying `cause`, or None when there is no cause.

        The copy's message becomes the cause text; the original message is
        kept as `details["context"]`.
        """
        if cause is None:
            return None
        derived = self._copy()
        derived.details = {**self.details, "context": self.message}
        derived.message = str(cause)
        derived.args = (derived.message,)
        derived.cause = cause
        derived.__cause__ = cause
        return derived

    def wrap_print(
        self, cause: Optional[BaseException], message: str
    ) -> Optional["AppError"]:
        """Return a copy with the cause text appended and `message` as context."""
        if cause is None:
            return None
        derived = self._copy()
        derived.message = f"{self.message}{cause}"
        derived.details = {**self.details, "context": message}
        derived.args = (derived.message,)
        derived.cause = cause
        derived.__cause__ = cause
        return derived

    def wrap_printf(
        self, cause: Optional[BaseException], fmt: str, *args: Any
    ) -> Optional["AppError"]:
        """
        Return a copy with `cause` formatted into the message and a formatted context.

        The message is used as a ``%s`` template for the cause; a message
        without a placeholder gets the cause appended instead. The context
        is ``fmt % args``.

        >>> err = AppError(ErrorCode.SYSTEM_ERROR, "lookup failed: %s")
        >>> str(err.wrap_printf(KeyError("k"), "loading %s", "board"))
        "loading board: lookup failed: 'k'"
        """
        if cause is None:
            return None
        derived = self._copy()
        if "%s" in self.message:
            derived.message = self.message % (cause,)
        else:
            derived.message = f"{self.message}{cause}"
        derived.details = {**self.details, "context": fmt % args if args else fmt}
        derived.args = (derived.message,)
        derived.cause = cause
        derived.__cause__ = cause
        return derived

    def _copy(self) -> "AppError":
        # copy.copy() would rebuild the exception from self.args
        derived = self.__class__.__new__(self.__class__)
        derived.__dict__.update(self.__dict__)
        derived.args = self.args
        derived.__cause__ = self.__cause__
        derived.details = dict(self.details)
        return derived

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": repr(self.cause) if self.cause is not None else None,
        }

    def __str__(self) -> str:
        context = self.details.get("context")
        return f"{context}: {self.message}" if context else self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r}"
            ")"
        )


class ValidationError(AppError):
    """
    Raised locally, before any network call, when arguments are invalid.

    Never carries a network cause.
    """

    DEFAULT_CODE = ErrorCode.PARAM_ERROR

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(ErrorCode.PARAM_ERROR, message, details=details)


class LockValueError(ValidationError):
    """Raised when a lock value coerces to an empty wire string."""

    def __init__(self, key: str) -> None:
        super().__init__("value is empty", key=key)
        self.key = key


class UnsupportedValueError(ValidationError):
    """Raised when a value has no wire representation."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"unsupported value type: {type(value).__name__}",
            value_type=type(value).__name__,
        )


class ReplyDecodeError(AppError):
    """
    Raised when a reply's shape violates the command's documented layout.

    Examples: odd-length field/value payload, scan reply that is not a
    two-element array, non-numeric cursor.
    """

    DEFAULT_CODE = ErrorCode.SYSTEM_ERROR

    def __init__(self, command: str, message: str, reply: Any = None) -> None:
        super().__init__(
            ErrorCode.SYSTEM_ERROR,
            f"{command}: {message}",
            details={"command": command, "reply_type": type(reply).__name__},
        )
        self.command = command


# Prebuilt instances for the standard codes.
ERROR_SUCCESS = AppError(ErrorCode.SUCCESS, "success")
ERROR_PARAM_INVALID = AppError(ErrorCode.PARAM_ERROR)
ERROR_SYSTEM = AppError(ErrorCode.SYSTEM_ERROR)
ERROR_USER_NOT_LOGIN = AppError(ErrorCode.USER_NOT_LOGIN)
ERROR_INVALID_REQUEST = AppError(ErrorCode.INVALID_REQUEST)
ERROR_DEFAULT = AppError(ErrorCode.DEFAULT_ERROR)
# Usage: ERROR_CUSTOM.format("something went wrong")
ERROR_CUSTOM = AppError(ErrorCode.CUSTOM_ERROR, "%s")


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "AppError",
    "ValidationError",
    "LockValueError",
    "UnsupportedValueError",
    "ReplyDecodeError",
    "ERROR_SUCCESS",
    "ERROR_PARAM_INVALID",
    "ERROR_SYSTEM",
    "ERROR_USER_NOT_LOGIN",
    "ERROR_INVALID_REQUEST",
    "ERROR_DEFAULT",
    "ERROR_CUSTOM",
]
