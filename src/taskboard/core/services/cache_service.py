"""Cache service - main orchestrator for caching operations."""

import logging
from datetime import timedelta
from typing import Any

from taskboard.core.entities.cache_config import CacheConfig
from taskboard.core.entities.cache_entry import CacheEntry
from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.interfaces.cache_backend import ICacheBackend
from taskboard.core.interfaces.key_builder import IKeyBuilder
from taskboard.core.interfaces.serializer import ISerializer

logger = logging.getLogger(__name__)


class CacheService:
    """Domain service that orchestrates caching operations.

    This is the main entry point for cache operations,
    composing backend, key builder, and serializer. One instance is
    created per process and shared by every cache-aware service.

    Cache failures never reach callers: a backend or serializer error
    on read is logged and reported as a miss, and on write or delete it
    is logged and dropped.
    """

    def __init__(
        self,
        backend: ICacheBackend,
        key_builder: IKeyBuilder,
        serializer: ISerializer,
        config: CacheConfig | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            backend: The cache backend to use for storage.
            key_builder: The key builder for generating cache keys.
            serializer: The serializer for encoding/decoding values.
            config: Optional cache configuration. Uses defaults if not provided.
        """
        self._backend = backend
        self._key_builder = key_builder
        self._serializer = serializer
        self._config = config or CacheConfig()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0
        self._errors = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def backend(self) -> ICacheBackend:
        """Get the underlying cache backend."""
        return self._backend

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, sets, deletes, errors and total reads.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "sets": self._sets,
            "deletes": self._deletes,
            "errors": self._errors,
            "total": self._hits + self._misses,
        }

    async def get(self, key: CacheKey) -> Any | None:
        """Look up a cached value.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None on a miss, an expired entry, a
            disabled cache or any cache failure.
        """
        if not self._config.enabled:
            self._misses += 1
            return None

        raw_key = self._key_builder.build(key)
        try:
            cached_data = await self._backend.get(raw_key)
            if cached_data is None:
                self._misses += 1
                logger.debug("cache miss %s", raw_key)
                return None
            value = self._serializer.deserialize(cached_data)
        except Exception:
            self._errors += 1
            self._misses += 1
            logger.warning("cache read failed for %s, falling back to store", raw_key, exc_info=True)
            return None

        self._hits += 1
        logger.debug("cache hit %s", raw_key)
        return value

    async def set(
        self,
        key: CacheKey,
        value: Any,
        ttl: timedelta | None = None,
    ) -> CacheEntry:
        """Store a value, replacing any previous entry for the key.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional TTL. Uses config default if not provided.

        Returns:
            The created CacheEntry.
        """
        raw_key = self._key_builder.build(key)
        effective_ttl = ttl if ttl is not None else self._config.default_ttl
        entry = CacheEntry.create(key=raw_key, value=value, ttl=effective_ttl)

        if not self._config.enabled:
            return entry

        try:
            serialized = self._serializer.serialize(value)
            await self._backend.set(raw_key, serialized, effective_ttl)
        except Exception:
            self._errors += 1
            logger.warning("cache write failed for %s", raw_key, exc_info=True)
            return entry

        self._sets += 1
        return entry

    async def delete(self, key: CacheKey) -> bool:
        """Delete a cached value. Deleting an absent key is a no-op.

        Args:
            key: The cache key.

        Returns:
            True if an entry was removed.
        """
        raw_key = self._key_builder.build(key)
        try:
            deleted = await self._backend.delete(raw_key)
        except Exception:
            self._errors += 1
            logger.error("cache delete failed for %s", raw_key, exc_info=True)
            return False

        if deleted:
            self._deletes += 1
        return deleted

    async def delete_family(self, family: KeyFamily) -> int:
        """Delete every cached key of a family.

        Args:
            family: The key family to evict.

        Returns:
            Number of entries removed.
        """
        pattern = self._key_builder.build_pattern(family)
        try:
            count = await self._backend.delete_pattern(pattern)
        except Exception:
            self._errors += 1
            logger.error("cache pattern delete failed for %s", pattern, exc_info=True)
            return 0

        self._deletes += count
        return count

    async def clear(self) -> bool:
        """Clear all cached entries and reset statistics.

        Returns:
            False if the backend failed; statistics are kept in that case.
        """
        try:
            await self._backend.clear()
        except Exception:
            self._errors += 1
            logger.error("cache clear failed", exc_info=True)
            return False

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0
        self._errors = 0
        return True
