"""Unit tests for the query result cache."""

import pytest

from course_search.search.query_cache import QueryCache


@pytest.mark.unit
class TestUnbounded:
    def test_miss_then_hit(self):
        cache: QueryCache[str] = QueryCache()
        assert cache.get("k") is None
        cache.put("k", "v")
        assert cache.get("k") == "v"
        assert (cache.hits, cache.misses) == (1, 1)

    def test_never_evicts(self):
        cache: QueryCache[int] = QueryCache()
        for value in range(500):
            cache.put(value, value)
        assert len(cache) == 500
        assert cache.evictions == 0

    def test_clear(self):
        cache: QueryCache[int] = QueryCache()
        cache.put("a", 1)
        cache.clear()
        assert "a" not in cache
        assert len(cache) == 0


@pytest.mark.unit
class TestBounded:
    def test_evicts_least_recently_used(self):
        cache: QueryCache[int] = QueryCache(max_entries=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert cache.evictions == 1

    def test_overwrite_does_not_evict(self):
        cache: QueryCache[int] = QueryCache(max_entries=1)
        cache.put("a", 1)
        cache.put("a", 2)
        assert cache.get("a") == 2
        assert cache.evictions == 0

    @pytest.mark.parametrize("max_entries", [0, -3])
    def test_rejects_non_positive_capacity(self, max_entries):
        with pytest.raises(ValueError, match="max_entries"):
            QueryCache(max_entries=max_entries)


@pytest.mark.unit
class TestEventsAndStats:
    def test_event_hook_receives_every_event(self):
        events: list[str] = []
        cache: QueryCache[int] = QueryCache(max_entries=1, on_event=events.append)
        cache.get("a")
        cache.put("a", 1)
        cache.get("a")
        cache.put("b", 2)

        assert events == ["miss", "hit", "eviction"]

    def test_stats_snapshot(self):
        cache: QueryCache[int] = QueryCache(max_entries=4)
        cache.put("a", 1)
        cache.get("a")
        cache.get("b")

        assert cache.stats() == {
            "entries": 1,
            "max_entries": 4,
            "hits": 1,
            "misses": 1,
            "evictions": 0,
        }
