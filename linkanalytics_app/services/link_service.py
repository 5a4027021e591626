import asyncio
from typing import Optional

from linkanalytics_app.cache.strategies import CacheStrategy
from linkanalytics_app.config import settings
from linkanalytics_app.models.link import Link, LinkAnalytics
from linkanalytics_app.storage.hit_log import HitLog
from linkanalytics_app.storage.record_store import FileRecordStore


class LinkService:
    """
    Link Service composing the record store, hit log and destination cache.

    Store and hit log calls are blocking file I/O, so each one runs in a
    worker thread (asyncio.to_thread). Concurrent requests on the same link
    are serialized by the store's per-identifier locks, not here.

    Errors from the storage layer propagate unchanged:
    - LinkNotFoundError: unknown identifier
    - InvalidDestinationError: empty or multi-line destination
    - StorageError: I/O failure
    """

    def __init__(
        self,
        records: FileRecordStore,
        hits: HitLog,
        cache: Optional[CacheStrategy] = None
    ):
        """
        Initialize link service with dependencies.

        Args:
            records: Record store holding the links
            hits: Hit log writing into the same storage units
            cache: Cache strategy (optional, for destination lookups)
        """
        self.records = records
        self.hits = hits
        self.cache = cache

    async def register_destination(self, destination: str) -> Link:
        """Register a destination and return its link

        Registering the same destination again returns the same link and
        keeps its hit history.
        """
        link = await asyncio.to_thread(self.records.create, destination)

        if self.cache:
            await self.cache.set(_cache_key(link.identifier), link.destination, ttl=settings.cache_ttl)

        return link

    async def get_link(self, identifier: str) -> Link:
        """Look up a link without recording a hit"""
        destination = await self._resolve_destination(identifier)
        return Link(identifier=identifier, destination=destination)

    async def visit(self, identifier: str, client_signature: str) -> str:
        """
        Record a hit and return the destination.

        Used both for redirects and for collect-only requests; the caller
        decides what to do with the returned destination.
        """
        destination = await self._resolve_destination(identifier)
        await asyncio.to_thread(self.hits.append, identifier, client_signature)
        return destination

    async def get_analytics(self, identifier: str) -> LinkAnalytics:
        """Link plus its full hit history, raw and parsed"""
        link = await asyncio.to_thread(self.records.load, identifier)
        history = await asyncio.to_thread(self.hits.read_all, identifier)

        return LinkAnalytics(
            link=link,
            history=history,
            hits=self.hits.parse_history(history)
        )

    async def _resolve_destination(self, identifier: str) -> str:
        """
        Get destination using Cache-Aside pattern.

        Destinations never change once written, so a cached entry is
        always current.
        """
        cache_key = _cache_key(identifier)

        if self.cache:
            cached = await self.cache.get(cache_key)
            if cached:
                return cached

        link = await asyncio.to_thread(self.records.load, identifier)

        if self.cache:
            await self.cache.set(cache_key, link.destination, ttl=settings.cache_ttl)

        return link.destination


def _cache_key(identifier: str) -> str:
    return f"link:{identifier}"
