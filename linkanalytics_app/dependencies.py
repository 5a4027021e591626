"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the identifier strategy,
storage and cache that are injected into the link service and routes.
Tests swap them out through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from linkanalytics_app.cache.factory import CacheFactory, CacheBackend
from linkanalytics_app.cache.strategies import CacheStrategy
from linkanalytics_app.identifiers.factory import IdentifierFactory
from linkanalytics_app.services.link_service import LinkService
from linkanalytics_app.storage.hit_log import HitLog
from linkanalytics_app.storage.record_store import FileRecordStore
from linkanalytics_app.config import settings


@lru_cache()
def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).

    @lru_cache ensures this is called only once.
    """
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


@lru_cache()
def get_record_store() -> FileRecordStore:
    """
    Get record store instance (singleton).

    One instance per process, so every request shares the same
    per-identifier locks.
    """
    return FileRecordStore(
        base_dir=settings.storage_dir,
        identifiers=IdentifierFactory.create_strategy(),
        suffix=settings.storage_suffix
    )


@lru_cache()
def get_hit_log() -> HitLog:
    """Get hit log instance (singleton), bound to the shared record store"""
    return HitLog(get_record_store(), prefix=settings.hit_prefix)


def get_link_service(
    records: FileRecordStore = Depends(get_record_store),
    hits: HitLog = Depends(get_hit_log),
    cache: CacheStrategy = Depends(get_cache)
) -> LinkService:
    """Get LinkService with all dependencies injected"""
    return LinkService(records=records, hits=hits, cache=cache)
