"""Tests for the ephemeral cache."""

import pytest

from media_resolver.cache import EphemeralCache, cache_key
from media_resolver.models import ExtractionResult, MediaAsset, MediaKind, Platform


def make_result(n: int = 0) -> ExtractionResult:
    return ExtractionResult.from_assets(
        source_url=f"https://instagram.com/p/{n}",
        platform=Platform.INSTAGRAM,
        title=f"Post {n}",
        author="@someone",
        assets=[MediaAsset(url=f"https://cdn/{n}.mp4", kind=MediaKind.VIDEO, quality="hd")],
    )


class TestEphemeralCache:
    """Tests for get/set/delete/clear and expiry."""
    
    @pytest.fixture
    def cache(self, clock):
        return EphemeralCache(default_ttl=300, max_entries=100, evict_batch=50, clock=clock)
    
    def test_round_trip(self, cache):
        value = make_result(1)
        cache.set("k", value, 60)
        assert cache.get("k") == value
    
    def test_missing_key(self, cache):
        assert cache.get("nope") is None
    
    def test_expires_after_ttl(self, cache, clock):
        cache.set("k", make_result(), 60)
        clock.advance(59)
        assert cache.get("k") is not None
        clock.advance(1)
        assert cache.get("k") is None
    
    def test_expired_entry_evicted_on_access(self, cache, clock):
        cache.set("k", make_result(), 10)
        clock.advance(11)
        assert len(cache) == 1
        cache.get("k")
        assert len(cache) == 0
    
    def test_default_ttl(self, cache, clock):
        cache.set("k", make_result())
        clock.advance(299)
        assert cache.get("k") is not None
        clock.advance(1)
        assert cache.get("k") is None
    
    def test_zero_ttl_never_expires(self, cache, clock):
        cache.set("k", make_result(), 0)
        clock.advance(10**9)
        assert cache.get("k") is not None
    
    def test_set_overwrites(self, cache):
        cache.set("k", make_result(1))
        cache.set("k", make_result(2))
        assert cache.get("k").title == "Post 2"
        assert len(cache) == 1
    
    def test_delete_and_clear(self, cache):
        cache.set("a", make_result(1))
        cache.set("b", make_result(2))
        cache.delete("a")
        cache.delete("missing")
        assert "a" not in cache
        assert "b" in cache
        cache.clear()
        assert len(cache) == 0


class TestEviction:
    """Tests for the size bound."""
    
    def test_never_exceeds_max_entries(self, clock):
        cache = EphemeralCache(max_entries=100, evict_batch=50, clock=clock)
        for i in range(101):
            cache.set(f"k{i}", make_result(i))
            assert len(cache) <= 100
    
    def test_evicts_oldest_inserted(self, clock):
        cache = EphemeralCache(max_entries=100, evict_batch=50, clock=clock)
        for i in range(101):
            cache.set(f"k{i}", make_result(i))
        
        assert len(cache) == 51
        for i in range(50):
            assert cache.get(f"k{i}") is None
        for i in range(50, 101):
            assert cache.get(f"k{i}") is not None
    
    def test_reads_do_not_change_eviction_order(self, clock):
        cache = EphemeralCache(max_entries=4, evict_batch=2, clock=clock)
        for i in range(4):
            cache.set(f"k{i}", make_result(i))
        cache.get("k0")
        cache.set("k4", make_result(4))
        
        assert cache.get("k0") is None
        assert cache.get("k1") is None
        assert cache.get("k2") is not None
    
    def test_expired_entries_purged_before_eviction(self, clock):
        cache = EphemeralCache(max_entries=3, evict_batch=2, clock=clock)
        cache.set("short", make_result(0), 5)
        cache.set("a", make_result(1), 100)
        cache.set("b", make_result(2), 100)
        clock.advance(10)
        cache.set("c", make_result(3), 100)
        
        # Dropping the expired entry was enough
        assert len(cache) == 3
        assert cache.get("a") is not None


class TestCacheKey:
    """Tests for cache key derivation."""
    
    def test_includes_platform(self):
        url = "https://instagram.com/p/abc"
        assert cache_key(url, Platform.INSTAGRAM) != cache_key(url, Platform.FACEBOOK)
    
    def test_deterministic(self):
        url = "https://instagram.com/p/abc"
        assert cache_key(url, Platform.INSTAGRAM) == cache_key(url, Platform.INSTAGRAM)
        assert cache_key(url, Platform.INSTAGRAM) == "download:instagram:https://instagram.com/p/abc"
