"""
Unit tests for the redis-py backed executor and the nil-aware reply variant.
"""

import pytest
from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from rediskit.core.exceptions import ValidationError
from rediskit.core.redis.executor import ABSENT, Absent, Found, RedisExecutor, execute_optional
from rediskit.core.redis.metrics import RedisMetrics


@pytest.fixture
def redis_client(mocker):
    """Stand-in for redis.Redis with a populated callback table."""
    client = mocker.MagicMock()
    client.response_callbacks = {"HGETALL": dict, "ZSCORE": float}
    client.connection_pool.connection_kwargs = {"protocol": 2}
    return client


class TestReplyVariant:
    """Test Found / ABSENT."""

    def test_absent_is_singleton_and_falsy(self):
        assert Absent() is ABSENT
        assert not ABSENT
        assert repr(ABSENT) == "ABSENT"

    def test_execute_optional(self, mock_executor):
        mock_executor.execute.return_value = b"v"
        assert execute_optional(mock_executor, "HGET", "h", "f") == Found(b"v")

        mock_executor.execute.return_value = None
        assert execute_optional(mock_executor, "HGET", "h", "f") is ABSENT

    def test_found_zero_is_not_absent(self, mock_executor):
        """Falsy replies such as 0 or [] are values, not nil."""
        mock_executor.execute.return_value = 0
        assert execute_optional(mock_executor, "ZRANK", "z", "m") == Found(0)


class TestRedisExecutor:
    """Test command forwarding, metrics and error propagation."""

    def test_clears_response_callbacks(self, redis_client):
        RedisExecutor(redis_client)
        assert redis_client.response_callbacks == {}

    def test_execute_forwards_and_records(self, redis_client):
        redis_client.execute_command.return_value = [b"a", b"1"]
        executor = RedisExecutor(redis_client)

        assert executor.execute("HGETALL", "h") == [b"a", b"1"]
        redis_client.execute_command.assert_called_once_with("HGETALL", "h")
        assert RedisMetrics.get_operation_metrics("HGETALL")["calls"] == 1

    def test_errors_propagate_unchanged(self, redis_client):
        error = RedisConnectionError("connection refused")
        redis_client.execute_command.side_effect = error
        executor = RedisExecutor(redis_client)

        with pytest.raises(RedisConnectionError) as exc_info:
            executor.execute("HGET", "h", "f")

        assert exc_info.value is error
        assert RedisMetrics.get_operation_metrics("HGET")["failures"] == 1

    def test_ping(self, redis_client):
        redis_client.execute_command.return_value = b"PONG"
        assert RedisExecutor(redis_client).ping() is True

    def test_from_url_forces_raw_resp2(self, mocker):
        """Replies are never decoded and always use the flat RESP2 layout."""
        from_url = mocker.patch("rediskit.core.redis.executor.Redis.from_url")
        from_url.return_value.response_callbacks = {}
        from_url.return_value.connection_pool.connection_kwargs = {"protocol": 2}

        RedisExecutor.from_url(
            "redis://localhost:6379/0", decode_responses=True, protocol=3, socket_timeout=1
        )

        from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=False, protocol=2, socket_timeout=1
        )

    def test_from_url_builds_resp2_pool(self):
        """The real redis-py pool is configured for RESP2 (no connection is opened)."""
        executor = RedisExecutor.from_url("redis://localhost:6379/0")
        assert executor.client.connection_pool.connection_kwargs["protocol"] == 2

    @pytest.mark.parametrize("protocol", [3, "3", None])
    def test_rejects_non_resp2_client(self, redis_client, protocol):
        """RESP3 map and nested-pair replies would not decode; such clients are refused."""
        redis_client.connection_pool.connection_kwargs = {"protocol": protocol}

        with pytest.raises(ValidationError, match="protocol=2"):
            RedisExecutor(redis_client)

    def test_accepts_resp2_client(self):
        client = Redis(host="localhost", port=6379, protocol=2)
        assert RedisExecutor(client).client is client

    def test_close(self, redis_client):
        RedisExecutor(redis_client).close()
        redis_client.close.assert_called_once()
