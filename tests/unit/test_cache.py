"""Unit tests for cache utilities."""

import asyncio

import pytest

from smart_link_formatter.utils.cache import LRUCache, MetadataCache


class TestLRUCache:
    """Tests for LRUCache."""

    @pytest.mark.asyncio
    async def test_get_set(self):
        """Test basic get/set operations."""
        cache: LRUCache[str] = LRUCache(max_size=10)

        await cache.set("key1", "value1")
        assert await cache.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self):
        """Test a missing key returns None."""
        cache: LRUCache[str] = LRUCache(max_size=10)
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_eviction_on_max_size(self):
        """Test that oldest items are evicted at max size."""
        cache: LRUCache[str] = LRUCache(max_size=2)

        await cache.set("key1", "value1")
        await cache.set("key2", "value2")
        await cache.set("key3", "value3")  # Should evict key1

        assert await cache.get("key1") is None
        assert await cache.get("key2") == "value2"
        assert await cache.get("key3") == "value3"

    @pytest.mark.asyncio
    async def test_lru_order_updated_on_access(self):
        """Test reads refresh an entry's LRU position."""
        cache: LRUCache[str] = LRUCache(max_size=2)

        await cache.set("key1", "value1")
        await cache.set("key2", "value2")
        await cache.get("key1")
        await cache.set("key3", "value3")  # Should evict key2

        assert await cache.get("key1") == "value1"
        assert await cache.get("key2") is None

    @pytest.mark.asyncio
    async def test_ttl_expiry(self):
        """Test entries expire after their TTL."""
        cache: LRUCache[str] = LRUCache(max_size=10, ttl_seconds=0.05)

        await cache.set("key1", "value1")
        await asyncio.sleep(0.1)

        assert await cache.get("key1") is None
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_clear(self):
        cache: LRUCache[str] = LRUCache(max_size=10)
        await cache.set("key1", "value1")
        await cache.clear()
        assert cache.size == 0


class TestMetadataCache:
    """Tests for MetadataCache."""

    @pytest.mark.asyncio
    async def test_keyed_by_client_and_url(self):
        """Test entries are keyed by client and URL."""
        cache = MetadataCache(ttl_seconds=60, max_size=10)

        await cache.set("youtube", "https://youtu.be/abc", {"title": "T"})

        assert await cache.get("youtube", "https://youtu.be/abc") == {"title": "T"}
        assert await cache.get("default", "https://youtu.be/abc") is None

    @pytest.mark.asyncio
    async def test_returns_copies(self):
        """Test cached metadata cannot be mutated by callers."""
        cache = MetadataCache(ttl_seconds=60, max_size=10)
        metadata = {"title": "T"}

        await cache.set("default", "https://example.com", metadata)
        metadata["title"] = "changed"
        cached = await cache.get("default", "https://example.com")
        assert cached == {"title": "T"}

        cached["title"] = "mutated"
        assert await cache.get("default", "https://example.com") == {"title": "T"}

    @pytest.mark.asyncio
    async def test_disabled_cache(self):
        """Test a disabled cache stores nothing."""
        cache = MetadataCache(enabled=False)

        await cache.set("default", "https://example.com", {"title": "T"})

        assert await cache.get("default", "https://example.com") is None
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_close_clears(self):
        """Test closing the cache drops its entries."""
        cache = MetadataCache()
        await cache.set("default", "https://example.com", {"title": "T"})
        await cache.close()
        assert cache.size == 0
