"""
Tests for cache manager
"""
import pytest
from reelscroll.services.cache import CacheManager


@pytest.fixture
def cache(monkeypatch, fake_redis):
    """CacheManager backed by fakeredis"""
    async def fake_get_client(self):
        return fake_redis

    monkeypatch.setattr(CacheManager, "get_client", fake_get_client)
    return CacheManager()


def test_cache_is_singleton():
    assert CacheManager() is CacheManager()


@pytest.mark.asyncio
async def test_cache_set_and_get(cache):
    assert await cache.set("test_key", {"data": "test_value"}) is True
    assert await cache.get("test_key") == {"data": "test_value"}


@pytest.mark.asyncio
async def test_cache_get_nonexistent(cache):
    assert await cache.get("nonexistent_key_12345") is None


@pytest.mark.asyncio
async def test_cache_empty_list_is_a_hit(cache):
    await cache.set("empty", [])

    assert await cache.get("empty") == []


@pytest.mark.asyncio
async def test_cache_set_with_ttl(cache, fake_redis):
    await cache.set("ttl_key", {"data": "expires"}, ttl=100)

    ttl = await fake_redis.ttl("ttl_key")
    assert 0 < ttl <= 100


@pytest.mark.asyncio
async def test_cache_errors_are_swallowed(monkeypatch):
    async def broken_client(self):
        raise ConnectionError("redis down")

    monkeypatch.setattr(CacheManager, "get_client", broken_client)
    cache = CacheManager()

    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False
