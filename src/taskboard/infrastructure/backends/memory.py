"""In-memory cache backend implementation."""

import fnmatch
import math
import time
from collections.abc import Callable
from datetime import timedelta

from cachetools import TLRUCache  # type: ignore[import-untyped]

from taskboard.core.entities.cache_entry import CacheEntry


def _entry_expiry(_key: str, entry: CacheEntry, now: float) -> float:
    """Time-to-use for a stored entry, derived from its own TTL."""
    ttl = entry.ttl_seconds
    if ttl is None:
        return math.inf
    return now + ttl


class InMemoryCacheBackend:
    """In-memory cache backend with per-entry TTL.

    Suitable for single-process deployments. Uses cachetools'
    ``TLRUCache`` so every entry expires according to the TTL it was
    stored with. Expired entries read as absent and are purged lazily
    when the cache is next touched; there is no background eviction.

    With ``maxsize=None`` the cache is unbounded and never evicts for
    capacity, which is only appropriate for bounded workloads.
    """

    def __init__(
        self,
        maxsize: int | None = None,
        default_ttl: float | None = 300.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items in the cache, None for unbounded.
            default_ttl: Default TTL in seconds for items, None for no expiry.
            timer: Clock used for expiry, injectable for tests.
        """
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=math.inf if maxsize is None else maxsize,
            ttu=_entry_expiry,
            timer=timer,
        )

    async def get(self, key: str) -> bytes | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value as bytes, or None if not found or expired.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None
        return entry.value if isinstance(entry.value, bytes) else None

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value, overwriting any prior entry and resetting its expiry.

        Args:
            key: The cache key.
            value: The value to store as bytes.
            ttl: Optional time-to-live. If None, uses default.
        """
        if ttl is None and self._default_ttl is not None:
            ttl = timedelta(seconds=self._default_ttl)
        self._cache[key] = CacheEntry.create(key=key, value=value, ttl=ttl)

    async def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern to match keys.

        Returns:
            Number of keys deleted.
        """
        self._cache.expire()
        keys_to_delete = [
            key for key in list(self._cache.keys())
            if fnmatch.fnmatchcase(key, pattern)
        ]

        count = 0
        for key in keys_to_delete:
            if await self.delete(key):
                count += 1

        return count

    async def close(self) -> None:
        """Nothing to release for the in-memory backend."""

    def __len__(self) -> int:
        """Return the number of live items in the cache."""
        self._cache.expire()
        return len(self._cache)

    @property
    def maxsize(self) -> int | None:
        """Return the maximum size of the cache, None when unbounded."""
        return self._maxsize
