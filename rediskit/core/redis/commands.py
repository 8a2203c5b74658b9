"""Shared plumbing for the command mixins composed into `RedisClient`."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from rediskit.core.redis.coercion import pack_args
from rediskit.core.redis.executor import ABSENT, CommandExecutor, execute_optional

T = TypeVar("T")


class CommandsBase:
    """Holds the executor and the two call shapes every command uses."""

    def __init__(self, executor: CommandExecutor) -> None:
        self._executor = executor

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def _call(self, command: str, decode: Callable[[str, Any], T], *parts: Any) -> T:
        """Run a command whose reply is never nil."""
        return decode(command, self._executor.execute(command, *pack_args(*parts)))

    def _call_or(
        self,
        default: T,
        command: str,
        decode: Callable[[str, Any], T],
        *parts: Any,
    ) -> T:
        """Run a command, mapping a nil reply to `default`."""
        reply = execute_optional(self._executor, command, *pack_args(*parts))
        if reply is ABSENT:
            return default
        return decode(command, reply.value)
