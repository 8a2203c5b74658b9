"""rediskit: typed, validated access to Redis hashes, sorted sets and locks."""

from rediskit.core.redis import RedisClient, RedisService

__version__ = "0.1.0"

__all__ = ["RedisClient", "RedisService", "__version__"]
