"""
Test the TTL cache with a fake clock.
"""

import pytest

from career_engine.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_entries_expire():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=10, clock=clock)

    cache.set("a", 1)
    clock.now = 9.9
    assert cache.get("a") == 1
    clock.now = 10.0
    assert cache.get("a") is None
    assert "a" not in cache
    assert cache.hits == 1
    assert cache.misses == 1


def test_least_recently_used_evicted():
    cache = TTLCache(maxsize=2, clock=FakeClock())

    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert "a" in cache
    assert "b" not in cache
    assert len(cache) == 2


def test_clear_resets_counters():
    cache = TTLCache(clock=FakeClock())
    cache.set("a", 1)
    cache.get("a")
    cache.get("missing", default="fallback")

    cache.clear()

    assert len(cache) == 0
    assert cache.hits == 0
    assert cache.misses == 0


@pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"maxsize": 0}])
def test_rejects_non_positive_limits(kwargs):
    with pytest.raises(ValueError):
        TTLCache(**kwargs)


def test_expired_entries_are_not_counted():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=5, clock=clock)
    cache.set("a", 1)
    clock.now = 3.0
    cache.set("b", 2)

    clock.now = 6.0

    assert len(cache) == 1
    assert cache.get("b") == 2
