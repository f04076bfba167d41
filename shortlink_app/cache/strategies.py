"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The link service caches only the immutable part of a record (target, expiry,
password hash). Click counts always go to the link store, so a stale or
failing cache can never lose or invent a click.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Dict, Tuple
import logging
import time


logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    All methods are async because cache operations involve I/O (network for Redis).
    A cache failure is never fatal: implementations log it and behave like a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """
        Set value in cache with TTL (Time To Live).

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: 1 hour)

        Returns:
            True if successful, False otherwise
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation on top of ``redis.asyncio``.

    Shared between all app processes, TTL enforced by Redis.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis cache.

        Args:
            redis_client: ``redis.asyncio.Redis`` client instance
        """
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(key)
        except Exception as e:
            logger.warning("Redis get error for %s: %s", key, e)
            return None

        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(await self.redis.setex(key, ttl, value))
        except Exception as e:
            logger.warning("Redis set error for %s: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.

    Expired entries are dropped on read and swept on write. Not shared between
    processes and lost on restart; meant for development and tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._cache: Dict[str, Tuple[str, float]] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            self._cache.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        now = self._clock()
        # Keys that are never read again would otherwise stay forever
        expired = [k for k, (_, expires_at) in self._cache.items() if now >= expires_at]
        for k in expired:
            del self._cache[k]

        self._cache[key] = (value, now + ttl)
        return True

    def __len__(self) -> int:
        return len(self._cache)


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Default backend: every lookup goes to the link store.
    """

    async def get(self, key: str) -> Optional[str]:
        """Always returns None (cache miss)"""
        return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """Pretends to set but does nothing"""
        return True
