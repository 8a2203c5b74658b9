"""
Pytest Configuration and Fixtures for rediskit Tests
=====================================================

Purpose
-------
Centralized test fixtures for the rediskit test suite: a mocked command
executor for unit tests and a real Redis server for integration tests.

Responsibilities
----------------
- Testcontainers setup for Redis
- Mock executor and client fixtures for unit tests
- Metrics and service state reset between tests

Non-Responsibilities
--------------------
- Test implementation (delegated to test files)
- Production configuration (test-specific only)

Architecture Notes
------------------
- Unit tests use a mocked executor (fast, isolated, no network)
- Integration tests use testcontainers (real Redis); they are skipped when
  no container runtime is available
- Fixtures follow scope hierarchy: session > function
"""

from __future__ import annotations

import os
from typing import Generator

import pytest
from testcontainers.redis import RedisContainer

from rediskit.core.config import Config
from rediskit.core.logging.logger import get_logger
from rediskit.core.redis.client import RedisClient
from rediskit.core.redis.executor import RedisExecutor
from rediskit.core.redis.metrics import RedisMetrics
from rediskit.core.redis.service import RedisService

logger = get_logger(__name__)

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ.setdefault("ENVIRONMENT", "testing")
    os.environ.setdefault("LOG_LEVEL", "DEBUG")
    Config.load()


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Give every test fresh metrics and an uninitialized RedisService."""
    RedisMetrics.reset()
    yield
    RedisService.shutdown()
    RedisMetrics.reset()


# ============================================================================
# TESTCONTAINERS FIXTURES (Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def redis_container() -> Generator[RedisContainer, None, None]:
    """
    Start Redis testcontainer for integration tests.

    Scope: session (container persists across all tests)
    Uses: Integration tests that need real Redis
    """
    logger.info("Starting Redis testcontainer...")
    try:
        container = RedisContainer(image="redis:7-alpine")
        container.start()
    except Exception as exc:  # no docker daemon, image pull failure
        pytest.skip(f"Redis testcontainer unavailable: {exc}")

    logger.info(
        "Redis testcontainer started: %s:%s",
        container.get_container_host_ip(),
        container.get_exposed_port(6379),
    )

    yield container

    logger.info("Stopping Redis testcontainer...")
    container.stop()


@pytest.fixture(scope="session")
def redis_url(redis_container: RedisContainer) -> str:
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}/0"


@pytest.fixture
def live_client(redis_url: str) -> Generator[RedisClient, None, None]:
    """
    RedisClient connected to the testcontainer, on an empty database.

    Scope: function (database flushed before each test)
    """
    executor = RedisExecutor.from_url(redis_url)
    executor.execute("FLUSHDB")
    yield RedisClient(executor)
    executor.close()


# ============================================================================
# MOCK FIXTURES (Unit Tests)
# ============================================================================


@pytest.fixture
def mock_executor(mocker):
    """
    Mock CommandExecutor for unit tests.

    Set `execute.return_value` or `execute.side_effect` to script replies;
    inspect `execute.call_args_list` for the exact wire arguments.
    """
    executor = mocker.MagicMock()
    executor.execute = mocker.MagicMock(return_value=None)
    return executor


@pytest.fixture
def client(mock_executor) -> RedisClient:
    """RedisClient over the mock executor."""
    return RedisClient(mock_executor)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def sent_commands(mock_executor) -> list:
    """
    Flatten the executor's calls into ``[command, arg, ...]`` lists.

    Usage:
        client.zrank("board", "alice")
        assert sent_commands(mock_executor) == [["ZRANK", "board", "alice"]]
    """
    return [list(call.args) for call in mock_executor.execute.call_args_list]
