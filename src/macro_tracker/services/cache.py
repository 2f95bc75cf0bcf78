"""Process-local cache for derived stats."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with expiry and prefix invalidation."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def invalidate_prefix(self, prefix: str) -> None:
        """Drop every entry whose key starts with the prefix."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Dictionary-backed cache shared by the services of one process."""

    clock: Callable[[], datetime] = field(default=_utc_now)
    _entries: dict[str, tuple[object, datetime]] = field(
        default_factory=dict, init=False, repr=False
    )

    def get(self, key: str) -> object | None:
        """Return a cached value, evicting it once expired."""
        cached = self._entries.get(key)
        if cached is None:
            return None
        value, expires_at = cached
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value until ``ttl_seconds`` from now.

        Expired entries are purged on every write.
        """
        now = self.clock()
        expired = [
            cached_key
            for cached_key, (_, expires_at) in self._entries.items()
            if now >= expires_at
        ]
        for cached_key in expired:
            del self._entries[cached_key]
        self._entries[key] = (value, now + timedelta(seconds=ttl_seconds))

    def keys(self) -> list[str]:
        """Return the keys currently held, expired or not."""
        return list(self._entries)

    def invalidate_prefix(self, prefix: str) -> None:
        """Remove all keys under a prefix."""
        for key in [key for key in self._entries if key.startswith(prefix)]:
            del self._entries[key]


def stats_cache_prefix(user_id: object) -> str:
    """Return the key prefix for a user's derived stats.

    Full keys append the timezone and local date, so a timezone change or
    a new day never reads a stale window.
    """
    return f"stats:{user_id}:"
