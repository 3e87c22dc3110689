"""Generic read-through caching for one entity type."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from taskboard.core.entities.cache_key import CacheKey
from taskboard.core.services.cache_service import CacheService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CachedQueries(Generic[T]):
    """Read-through helper parameterised by an entity's codec.

    Each cache-aware service owns one instance for its entity type. A
    cache hit is decoded with ``decode`` so callers receive the same
    entity type, values and ordering as a fresh store read. A cached
    value that no longer decodes is treated as a miss.
    """

    def __init__(
        self,
        cache: CacheService,
        encode: Callable[[T], dict[str, Any]],
        decode: Callable[[dict[str, Any]], T],
    ) -> None:
        self._cache = cache
        self._encode = encode
        self._decode = decode

    async def one(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[T | None]],
    ) -> T | None:
        """Return a single entity, loading and caching it on a miss.

        Absence is not cached, so an entity created later is visible on
        the next read.
        """
        cached = await self._cache.get(key)
        if cached is not None:
            try:
                return self._decode(cached)
            except (KeyError, TypeError, ValueError):
                logger.warning("discarding undecodable cache entry %s", key, exc_info=True)

        entity = await loader()
        if entity is not None:
            await self._cache.set(key, self._encode(entity))
        return entity

    async def many(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[list[T]]],
    ) -> list[T]:
        """Return a collection, loading and caching it on a miss."""
        cached = await self._cache.get(key)
        if cached is not None:
            try:
                return [self._decode(item) for item in cached]
            except (KeyError, TypeError, ValueError):
                logger.warning("discarding undecodable cache entry %s", key, exc_info=True)

        entities = await loader()
        await self._cache.set(key, [self._encode(entity) for entity in entities])
        return entities
