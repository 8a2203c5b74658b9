"""
Unit tests for the application error hierarchy.

Tests code-based equality, cause matching, message formatting and wrapping.
"""

import pytest

from rediskit.core.exceptions import (
    ERROR_CUSTOM,
    ERROR_DEFAULT,
    ERROR_PARAM_INVALID,
    ERROR_SYSTEM,
    AppError,
    ErrorCode,
    LockValueError,
    ReplyDecodeError,
    UnsupportedValueError,
    ValidationError,
)


class TestErrorCodes:
    """Test the fixed code table."""

    def test_code_values(self):
        """Codes are stable integers."""
        assert ErrorCode.SUCCESS == 0
        assert ErrorCode.PARAM_ERROR == 1
        assert ErrorCode.SYSTEM_ERROR == 2
        assert ErrorCode.USER_NOT_LOGIN == 3
        assert ErrorCode.INVALID_REQUEST == 6
        assert ErrorCode.DEFAULT_ERROR == 100
        assert ErrorCode.CUSTOM_ERROR == 101

    def test_default_message_comes_from_table(self):
        """A code without an explicit message gets the table text."""
        assert ERROR_PARAM_INVALID.message == "invalid request parameter"

    def test_code_defaults_to_default_error(self):
        """An AppError without a code is a DEFAULT_ERROR."""
        assert AppError().code == ErrorCode.DEFAULT_ERROR


class TestEquality:
    """Test code-based equality and matching."""

    def test_same_code_different_message_equal(self):
        """Errors compare equal by code only."""
        assert AppError(ErrorCode.PARAM_ERROR, "a") == AppError(ErrorCode.PARAM_ERROR, "b")

    def test_different_codes_not_equal(self):
        assert ERROR_PARAM_INVALID != ERROR_SYSTEM

    def test_equal_errors_hash_equal(self):
        assert hash(AppError(ErrorCode.SYSTEM_ERROR, "x")) == hash(ERROR_SYSTEM)

    def test_validation_error_matches_param_invalid(self):
        """Local validation failures carry PARAM_ERROR."""
        assert ValidationError("bad") == ERROR_PARAM_INVALID
        assert LockValueError("k") == ERROR_PARAM_INVALID
        assert UnsupportedValueError(object()) == ERROR_PARAM_INVALID

    def test_matches_walks_cause_chain(self):
        """matches() finds an AppError behind non-AppError causes."""
        inner = ValidationError("bad cursor")
        try:
            try:
                raise inner
            except ValidationError as exc:
                raise RuntimeError("outer") from exc
        except RuntimeError as outer:
            assert ERROR_PARAM_INVALID.matches(outer)
            assert not ERROR_SYSTEM.matches(outer)

    def test_matches_without_app_error(self):
        """A chain with no AppError never matches."""
        assert not ERROR_SYSTEM.matches(ValueError("x"))
        assert not ERROR_SYSTEM.matches(None)


class TestDerivation:
    """Test format/wrap helpers."""

    def test_format_custom(self):
        """ERROR_CUSTOM takes its whole message from format args."""
        err = ERROR_CUSTOM.format("queue is full")
        assert err.message == "queue is full"
        assert err.code == ErrorCode.CUSTOM_ERROR
        assert ERROR_CUSTOM.message == "%s"

    def test_wrap_none_returns_none(self):
        assert ERROR_SYSTEM.wrap(None) is None
        assert ERROR_SYSTEM.wrap_print(None, "ctx") is None

    def test_wrap_keeps_code_and_context(self):
        """wrap() carries the cause text and keeps the original message as context."""
        cause = ConnectionError("connection refused")
        err = ERROR_SYSTEM.wrap(cause)

        assert err == ERROR_SYSTEM
        assert err.message == "connection refused"
        assert err.details["context"] == ERROR_SYSTEM.message
        assert err.__cause__ is cause
        assert str(err) == f"{ERROR_SYSTEM.message}: connection refused"
        assert ERROR_SYSTEM.cause is None

    def test_wrap_print_appends_cause(self):
        err = ERROR_DEFAULT.wrap_print(KeyError("k"), "loading board")
        assert err.message.startswith(ERROR_DEFAULT.message)
        assert err.details["context"] == "loading board"

    def test_wrap_printf_formats_message_and_context(self):
        """The message is a template for the cause; the context takes printf args."""
        cause = ValueError("boom")
        err = ERROR_CUSTOM.wrap_printf(cause, "loading %s for %d", "board", 7)

        assert err == ERROR_CUSTOM
        assert err.message == "boom"
        assert err.details["context"] == "loading board for 7"
        assert str(err) == "loading board for 7: boom"
        assert err.__cause__ is cause
        assert ERROR_CUSTOM.message == "%s"

    def test_wrap_printf_without_placeholder_appends(self):
        err = ERROR_SYSTEM.wrap_printf(OSError("reset"), "refresh")
        assert err.message == f"{ERROR_SYSTEM.message}reset"
        assert err.details["context"] == "refresh"

    def test_wrap_printf_none_returns_none(self):
        assert ERROR_SYSTEM.wrap_printf(None, "loading %s", "board") is None

    def test_wrap_subclass_keeps_type(self):
        """Derived copies keep the concrete exception class."""
        err = ReplyDecodeError("HSCAN", "bad").wrap(ValueError("x"))
        assert isinstance(err, ReplyDecodeError)
        assert err.command == "HSCAN"

    def test_wrapped_error_is_raisable(self):
        with pytest.raises(AppError) as exc_info:
            raise ERROR_SYSTEM.wrap(OSError("boom"))
        assert exc_info.value.code == ErrorCode.SYSTEM_ERROR


class TestRepresentation:
    """Test serialization helpers."""

    def test_to_dict(self):
        err = ReplyDecodeError("ZSCAN", "expected even number of elements, got 3", [1, 2, 3])
        data = err.to_dict()

        assert data["error_type"] == "ReplyDecodeError"
        assert data["code"] == ErrorCode.SYSTEM_ERROR
        assert data["message"] == "ZSCAN: expected even number of elements, got 3"
        assert data["details"] == {"command": "ZSCAN", "reply_type": "list"}

    def test_lock_value_error_message(self):
        err = LockValueError("job:1")
        assert str(err) == "value is empty"
        assert err.key == "job:1"
