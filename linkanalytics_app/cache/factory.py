"""
Factory for the destination cache.

One cache per process, chosen by settings.cache_backend. Redis keys are
namespaced by the storage directory, because a destination is only valid
for the directory its link was registered in.
"""

import hashlib
import logging
from enum import Enum
from pathlib import Path

import redis

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from linkanalytics_app.config import settings

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


def cache_namespace(storage_dir: str) -> str:
    """Redis key prefix for one storage directory, e.g. 'linkanalytics:3f2a9c01d4e7:'"""
    resolved = str(Path(storage_dir).resolve())
    return f"linkanalytics:{hashlib.sha256(resolved.encode('utf-8')).hexdigest()[:12]}:"


class CacheFactory:
    """
    Builds the destination cache once and hands out the same instance.

    An unreachable Redis is not fatal: the cache only saves disk reads, so
    the factory falls back to the in-memory cache.
    """

    _instance: CacheStrategy = None

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        if cls._instance is None:
            cls._instance = cls._build(backend)
        return cls._instance

    @classmethod
    def _build(cls, backend: CacheBackend) -> CacheStrategy:
        if backend == CacheBackend.MEMORY:
            logger.info("Destination cache: in-memory")
            return InMemoryCache()

        if backend == CacheBackend.NULL:
            logger.info("Destination cache: disabled")
            return NullCache()

        if backend != CacheBackend.REDIS:
            raise ValueError(f"Unknown cache backend: {backend}")

        namespace = cache_namespace(settings.storage_dir)
        try:
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=False,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            redis_client.ping()
        except redis.RedisError as e:
            logger.warning("Redis unavailable (%s), destination cache falls back to in-memory", e)
            return InMemoryCache()

        logger.info("Destination cache: redis, namespace %s", namespace)
        return RedisCache(redis_client, namespace=namespace)

    @classmethod
    def clear_instance(cls):
        """Forget the cached instance (for testing)"""
        cls._instance = None
