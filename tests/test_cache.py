"""Tests for the in-memory cache."""

from datetime import timedelta

from macro_tracker.services.cache import InMemoryCache, stats_cache_prefix
from tests.conftest import FIXED_NOW, USER_ID


def test_cache_expires_after_ttl() -> None:
    now = [FIXED_NOW]
    cache = InMemoryCache(clock=lambda: now[0])
    cache.set("key", [1, 2], ttl_seconds=300)

    now[0] = FIXED_NOW + timedelta(seconds=299)
    assert cache.get("key") == [1, 2]

    now[0] = FIXED_NOW + timedelta(seconds=300)
    assert cache.get("key") is None


def test_invalidate_prefix_only_touches_matching_keys() -> None:
    cache = InMemoryCache()
    prefix = stats_cache_prefix(USER_ID)
    cache.set(f"{prefix}UTC:2024-03-15", "utc", ttl_seconds=60)
    cache.set(f"{prefix}Asia/Tokyo:2024-03-16", "tokyo", ttl_seconds=60)
    cache.set("stats:someone-else:UTC:2024-03-15", "other", ttl_seconds=60)

    cache.invalidate_prefix(prefix)

    assert cache.get(f"{prefix}UTC:2024-03-15") is None
    assert cache.get(f"{prefix}Asia/Tokyo:2024-03-16") is None
    assert cache.get("stats:someone-else:UTC:2024-03-15") == "other"


def test_set_purges_expired_entries() -> None:
    now = [FIXED_NOW]
    cache = InMemoryCache(clock=lambda: now[0])
    cache.set("old", "stale", ttl_seconds=60)

    now[0] = FIXED_NOW + timedelta(days=1)
    cache.set("new", "fresh", ttl_seconds=60)

    assert cache.keys() == ["new"]
