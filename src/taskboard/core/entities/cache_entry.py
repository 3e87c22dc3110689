"""Cache entry entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Represents a cached value with its insertion time and TTL.
    Owned by the cache layer; services only ever see the value.
    Expiry itself is enforced by the backend from ``ttl_seconds``.
    """

    key: str
    value: Any
    created_at: datetime
    ttl: timedelta | None = None

    @property
    def ttl_seconds(self) -> float | None:
        """TTL in seconds, or None when the entry never expires."""
        if self.ttl is None:
            return None
        return self.ttl.total_seconds()

    @classmethod
    def create(
        cls,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional time-to-live.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            value=value,
            created_at=datetime.now(timezone.utc),
            ttl=ttl,
        )
