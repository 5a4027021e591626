"""
Destination cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The cache is a pure optimization: the files on disk are the source of
truth, and a cache failure is only ever a cache miss.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis

logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    All methods are async because cache operations may involve I/O
    (network for Redis).
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

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

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete key from cache. True if it was there."""
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all cache entries"""
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation.

    Shared between worker processes and survives restarts if Redis is
    configured for persistence. Errors are logged and reported as misses.

    Every key is stored under `namespace`, so services with different
    storage directories can share one Redis database without seeing each
    other's links, and clear() only removes this service's entries.
    """

    def __init__(self, redis_client, namespace: str = ""):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
            namespace: Prefix added to every key
        """
        self.redis = redis_client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(self._key(key))
            return value.decode('utf-8') if value else None
        except redis.RedisError as e:
            logger.warning("Redis get error: %s", e)
            return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(self.redis.setex(self._key(key), ttl, value))
        except redis.RedisError as e:
            logger.warning("Redis set error: %s", e)
            return False

    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(self._key(key)))
        except redis.RedisError as e:
            logger.warning("Redis delete error: %s", e)
            return False

    async def clear(self) -> bool:
        """Remove every key in this cache's namespace"""
        try:
            keys = list(self.redis.scan_iter(match=f"{self.namespace}*"))
            if keys:
                self.redis.delete(*keys)
            return True
        except redis.RedisError as e:
            logger.warning("Redis clear error: %s", e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using a Python dict.

    Per-process and lost on restart. TTL is ignored: cached destinations
    never change, so entries cannot go stale.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._cache.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        with self._lock:
            self._cache[key] = value
        return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    async def clear(self) -> bool:
        with self._lock:
            self._cache.clear()
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every lookup goes to disk. Used in tests and when caching is disabled.
    """

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        return True

    async def delete(self, key: str) -> bool:
        return True

    async def clear(self) -> bool:
        return True
