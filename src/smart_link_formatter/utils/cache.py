"""Caching utilities for fetched link metadata."""

import time
from collections import OrderedDict
from typing import Generic, TypeVar

import anyio

from smart_link_formatter.models.common import Metadata

T = TypeVar("T")


class LRUCache(Generic[T]):
    """
    LRU cache with TTL support.

    Uses an OrderedDict for O(1) access and LRU eviction.
    """

    def __init__(self, max_size: int = 500, ttl_seconds: float | None = None) -> None:
        """
        Initialize the LRU cache.

        Args:
            max_size: Maximum number of items in the cache
            ttl_seconds: Time-to-live for cache entries (None for no expiry)
        """
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._cache: OrderedDict[str, tuple[T, float]] = OrderedDict()
        self._lock = anyio.Lock()

    def _is_expired(self, timestamp: float) -> bool:
        """Check if an entry has expired."""
        if self.ttl_seconds is None:
            return False
        return time.time() - timestamp > self.ttl_seconds

    async def get(self, key: str) -> T | None:
        """
        Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found/expired
        """
        async with self._lock:
            if key not in self._cache:
                return None

            value, timestamp = self._cache[key]

            if self._is_expired(timestamp):
                del self._cache[key]
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            return value

    async def set(self, key: str, value: T) -> None:
        """
        Set a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
        """
        async with self._lock:
            if key in self._cache:
                del self._cache[key]

            while len(self._cache) >= self.max_size:
                self._cache.popitem(last=False)

            self._cache[key] = (value, time.time())

    async def clear(self) -> None:
        """Clear all entries from the cache."""
        async with self._lock:
            self._cache.clear()

    @property
    def size(self) -> int:
        """Return current cache size."""
        return len(self._cache)


class MetadataCache:
    """
    Cache of fetched metadata, keyed by client and URL.

    Only successful fetches should be stored; fallback metadata is left out so
    a later paste retries the fetch.
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_size: int = 500,
        enabled: bool = True,
    ) -> None:
        """
        Initialize the metadata cache.

        Args:
            ttl_seconds: Time-to-live for cache entries
            max_size: Maximum number of entries
            enabled: Whether caching is enabled
        """
        self.enabled = enabled
        self._cache: LRUCache[Metadata] = LRUCache(
            max_size=max_size,
            ttl_seconds=float(ttl_seconds),
        )

    @staticmethod
    def _key(client: str, url: str) -> str:
        return f"{client}:{url.strip()}"

    async def get(self, client: str, url: str) -> Metadata | None:
        """Return a copy of cached metadata, or None."""
        if not self.enabled:
            return None
        entry = await self._cache.get(self._key(client, url))
        return dict(entry) if entry is not None else None

    async def set(self, client: str, url: str, metadata: Metadata) -> None:
        """Cache metadata for a URL."""
        if not self.enabled:
            return
        await self._cache.set(self._key(client, url), dict(metadata))

    async def clear(self) -> None:
        """Clear all cached entries."""
        await self._cache.clear()

    async def close(self) -> None:
        """Close the cache and release resources."""
        await self._cache.clear()

    @property
    def size(self) -> int:
        """Return current cache size."""
        return self._cache.size
