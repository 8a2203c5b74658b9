"""
In-process counters for Redis command round trips and lock attempts.

Purpose
-------
Give health endpoints and dashboards a cheap snapshot of how the executor is
behaving: per-command call counts, failures and latency percentiles, plus
global lock acquisition outcomes.

Architecture Notes
------------------
- Class-level state, guarded by one threading.Lock
- Commands are keyed by name, a small closed set; lock outcomes are only
  aggregated globally because lock keys are usually unique per job
- Percentiles are taken over the last LATENCY_WINDOW samples per command
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Deque, Dict

from rediskit.core.logging.logger import get_logger

logger = get_logger(__name__)

LATENCY_WINDOW = 1000


@dataclass
class CommandStats:
    """Counters for one command name."""

    calls: int = 0
    failures: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0
    window: Deque[float] = field(default_factory=lambda: deque(maxlen=LATENCY_WINDOW))

    def add(self, latency_ms: float, success: bool) -> None:
        self.calls += 1
        if not success:
            self.failures += 1
        self.total_ms += latency_ms
        self.max_ms = max(self.max_ms, latency_ms)
        self.window.append(latency_ms)

    def percentile(self, p: int) -> float:
        """Nearest-rank percentile over the recent window; 0.0 when empty."""
        if not self.window:
            return 0.0
        ordered = sorted(self.window)
        return ordered[min(int(len(ordered) * p / 100), len(ordered) - 1)]

    def to_dict(self) -> Dict[str, Any]:
        mean = self.total_ms / self.calls if self.calls else 0.0
        return {
            "calls": self.calls,
            "failures": self.failures,
            "mean_ms": round(mean, 2),
            "max_ms": round(self.max_ms, 2),
            "p50_ms": round(self.percentile(50), 2),
            "p99_ms": round(self.percentile(99), 2),
        }


@dataclass
class LockStats:
    """Outcomes of single-shot SET NX attempts across all lock keys."""

    attempts: int = 0
    acquired: int = 0

    @property
    def contended(self) -> int:
        return self.attempts - self.acquired

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attempts": self.attempts,
            "acquired": self.acquired,
            "contended": self.contended,
        }


class RedisMetrics:
    """
    Process-wide metrics collector.

    All methods are class methods; there is nothing to instantiate.
    """

    SLOW_OPERATION_MS: float = 100.0

    _commands: Dict[str, CommandStats] = {}
    _locks: LockStats = LockStats()
    _lock = Lock()
    _since: float = time.time()

    @classmethod
    def record_operation(cls, command: str, latency_ms: float, success: bool = True) -> None:
        with cls._lock:
            stats = cls._commands.get(command)
            if stats is None:
                stats = cls._commands[command] = CommandStats()
            stats.add(latency_ms, success)

        if latency_ms > cls.SLOW_OPERATION_MS:
            logger.warning(
                "Slow Redis operation detected",
                extra={
                    "command": command,
                    "latency_ms": round(latency_ms, 2),
                    "threshold_ms": cls.SLOW_OPERATION_MS,
                },
            )

    @classmethod
    def record_lock_acquisition(cls, acquired: bool) -> None:
        with cls._lock:
            cls._locks.attempts += 1
            if acquired:
                cls._locks.acquired += 1

    @classmethod
    def get_summary(cls) -> Dict[str, Any]:
        """
        Snapshot of everything collected so far.

        Returns
        -------
        Dict[str, Any]
            ``uptime_seconds``, ``operations`` (per command) and ``locks``
        """
        with cls._lock:
            return {
                "uptime_seconds": round(time.time() - cls._since, 2),
                "operations": {name: s.to_dict() for name, s in cls._commands.items()},
                "locks": cls._locks.to_dict(),
            }

    @classmethod
    def get_operation_metrics(cls, command: str) -> Dict[str, Any]:
        """Stats for one command, or an empty dict if it never ran."""
        with cls._lock:
            stats = cls._commands.get(command)
            return stats.to_dict() if stats else {}

    @classmethod
    def get_lock_metrics(cls) -> Dict[str, Any]:
        with cls._lock:
            return cls._locks.to_dict()

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._commands = {}
            cls._locks = LockStats()
            cls._since = time.time()
