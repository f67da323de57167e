"""Tests for cache module."""

from cache import TTLCache


class FakeClock:

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """Test TTL cache get/set/eviction behavior."""

    def test_set_and_get(self) -> None:
        cache = TTLCache(ttl_seconds=60)
        cache.set("key1", "value1")
        assert cache.get("key1") == "value1"

    def test_get_missing_key_returns_none(self) -> None:
        cache = TTLCache()
        assert cache.get("nonexistent") is None

    def test_expired_entry_returns_none(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=5, clock=clock)
        cache.set("key1", "value1")
        clock.now = 1006.0
        assert cache.get("key1") is None

    def test_entry_expires_exactly_at_deadline(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=5, clock=clock)
        cache.set("key1", "value1")
        clock.now = 1005.0
        assert cache.get("key1") is None

    def test_expired_read_evicts_entry(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=5, clock=clock)
        cache.set("key1", "value1")
        clock.now = 1006.0
        cache.get("key1")
        assert "key1" not in cache._store

    def test_entry_within_ttl_returns_value(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("key1", "value1")
        clock.now = 1009.0
        assert cache.get("key1") == "value1"

    def test_no_ttl_never_expires(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=None, clock=clock)
        cache.set("poster", "https://example.com/a.jpg")
        clock.now = 1000.0 + 10 * 365 * 24 * 3600
        assert cache.get("poster") == "https://example.com/a.jpg"
        assert len(cache) == 1

    def test_per_entry_ttl_overrides_default(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("short", "s", ttl_seconds=1)
        cache.set("forever", "f", ttl_seconds=None)
        clock.now = 1100.0
        assert cache.get("short") is None
        assert cache.get("forever") == "f"

    def test_eviction_removes_only_expired(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("old", "old_val")
        clock.now = 1008.0
        cache.set("new", "new_val")
        clock.now = 1011.0
        assert cache.get("old") is None
        assert cache.get("new") == "new_val"

    def test_len_excludes_expired(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=5, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.now = 1006.0
        assert len(cache) == 0

    def test_overwrite_resets_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("key", "v1")
        clock.now = 1008.0
        cache.set("key", "v2")
        clock.now = 1015.0
        assert cache.get("key") == "v2"
        assert len(cache) == 1

    def test_stores_complex_objects(self) -> None:
        cache = TTLCache()
        obj = {"nested": [1, 2, 3], "flag": True}
        cache.set("complex", obj)
        assert cache.get("complex") == obj

    def test_empty_list_is_a_hit(self) -> None:
        cache = TTLCache()
        cache.set("podcasts:calm", [])
        assert cache.get("podcasts:calm") == []

    def test_clear(self) -> None:
        cache = TTLCache()
        cache.set("a", 1)
        cache.clear()
        assert cache.get("a") is None


class TestTTLCacheMaxEntries:

    def test_unbounded_by_default(self) -> None:
        cache = TTLCache(ttl_seconds=None)
        for i in range(500):
            cache.set(f"k{i}", i)
        assert len(cache) == 500

    def test_drops_least_recently_used(self) -> None:
        cache = TTLCache(ttl_seconds=None, max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.get("a") == 1
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3
