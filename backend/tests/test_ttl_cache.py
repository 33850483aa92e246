"""Tests for the in-memory TTL cache."""

import pytest

from twdash.services.cache import TTLCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_rejects_non_positive_ttl():
    with pytest.raises(ValueError):
        TTLCache(0)


def test_get_missing_key(clock):
    assert TTLCache(60, clock=clock).get("2330") is None


def test_fresh_entry_is_served(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("2330", {"rsi": 55})

    clock.advance(59.9)

    assert cache.get("2330") == {"rsi": 55}
    assert not cache.is_stale("2330")


def test_entry_expires_at_ttl(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("2330", "bundle")

    clock.advance(60)

    assert cache.is_stale("2330")
    assert cache.get("2330") is None
    assert len(cache) == 0


def test_set_refreshes_timestamp(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", 1)
    clock.advance(50)
    cache.set("k", 2)
    clock.advance(50)

    assert cache.get("k") == 2
    assert cache.stored_at("k") == 1050.0


def test_tuple_keys(clock):
    cache = TTLCache(60, clock=clock)
    cache.set(("2330", "6mo", "1d"), "daily")
    cache.set(("2330", "5d", "1h"), "hourly")

    assert cache.get(("2330", "6mo", "1d")) == "daily"
    assert cache.get(("2330", "5d", "1h")) == "hourly"


def test_max_entries_evicts_oldest(clock):
    cache = TTLCache(60, clock=clock, max_entries=2)
    cache.set("a", 1)
    clock.advance(1)
    cache.set("b", 2)
    clock.advance(1)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_overwrite_does_not_evict(clock):
    cache = TTLCache(60, clock=clock, max_entries=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)

    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_invalidate(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.invalidate()
    assert len(cache) == 0
    assert cache.stored_at("b") is None
