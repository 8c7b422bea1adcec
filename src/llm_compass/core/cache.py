"""Redis-backed shared cache."""
import json
from typing import Any, Optional

from redis.asyncio import Redis

from .config import Settings
from .logger import LoggerService


class RedisClient:
    """Redis client for the shared cache layer.

    When ``redis`` is None (ENABLE_CACHE=False) every operation is a no-op and
    reads always miss.
    """

    def __init__(
        self,
        redis: Optional[Redis],
        logger: LoggerService,
        settings: Settings,
    ):
        """Initialize Redis client.

        Args:
            redis: Redis connection, or None when ENABLE_CACHE is False (stub mode).
            logger: Logger service instance.
            settings: Settings instance.
        """
        self.redis = redis
        self.settings = settings
        self.logger = logger.get_logger(__name__)
        self.logger.debug(
            "RedisClient initialized",
            extra={"enabled": redis is not None},
        )

    def _get_cache_key(self, key: str) -> str:
        """Get cache key with prefixes."""
        return f"{self.settings.REDIS_PREFIX}:{self.settings.CACHE_PREFIX}:{key}"

    async def ping(self) -> None:
        """Ping Redis to ensure it is reachable. No-op when Redis disabled."""
        if self.redis is None:
            return
        await self.redis.ping()
        self.logger.debug("Redis is reachable")

    async def close(self) -> None:
        """Close the Redis connection."""
        if self.redis is not None:
            await self.redis.aclose()

    async def cache_get(self, key: str) -> Optional[Any]:
        """Get a JSON value from cache.

        Args:
            key: Cache key without prefixes.

        Returns:
            Decoded value, or None on a miss or when Redis is disabled.
        """
        if self.redis is None:
            return None
        full_key = self._get_cache_key(key)
        value = await self.redis.get(full_key)
        if value is None:
            self.logger.debug("Cache miss", extra={"key": full_key})
            return None
        self.logger.debug("Cache hit", extra={"key": full_key})
        return json.loads(value)

    async def cache_set(
        self,
        key: str,
        value: Any,
        expire: Optional[int] = None,
    ) -> None:
        """Store a JSON-serializable value in cache.

        Args:
            key: Cache key without prefixes.
            value: Value to store.
            expire: Expiration time in seconds, CACHE_TTL when omitted.
        """
        if self.redis is None:
            return
        full_key = self._get_cache_key(key)
        await self.redis.set(
            full_key,
            json.dumps(value),
            ex=expire or self.settings.CACHE_TTL,
        )
        self.logger.debug("Cache set", extra={"key": full_key})

    async def cache_delete(self, key: str) -> None:
        """Delete value from cache.

        Args:
            key: Cache key without prefixes.
        """
        if self.redis is None:
            return
        full_key = self._get_cache_key(key)
        await self.redis.delete(full_key)
        self.logger.debug("Cache delete", extra={"key": full_key})
