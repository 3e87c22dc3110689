"""Redis cache backend for multi-process deployments."""

import logging
from datetime import timedelta
from typing import Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)

SCAN_BATCH = 100


class RedisCacheBackend:
    """Shared cache for several API processes.

    Keys arrive already namespaced by the key builder and are stored
    as given. ``namespace`` only bounds ``clear``, so a shared Redis
    database keeps other applications' data.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        namespace: str = "taskboard",
        default_ttl: Optional[int] = 300,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """
        Args:
            redis_url: Connection URL, ignored when ``client`` is given.
            namespace: Key prefix owned by this application.
            default_ttl: Seconds applied when ``set`` gets no TTL, None to keep forever.
            client: Pre-built client.
        """
        self._client: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._namespace = namespace
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[bytes]:
        return await self._client.get(key)

    async def set(self, key: str, value: bytes, ttl: Optional[timedelta] = None) -> None:
        """Store a value. Sub-second TTLs round up to one second."""
        seconds = self._default_ttl if ttl is None else max(1, int(ttl.total_seconds()))
        if seconds is None:
            await self._client.set(key, value)
        else:
            await self._client.setex(key, seconds, value)

    async def delete(self, key: str) -> bool:
        return await self._client.delete(key) > 0

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern, scanning in batches."""
        deleted = 0
        async for batch in self._scan(pattern):
            deleted += await self._client.delete(*batch)
        logger.debug("deleted %d redis keys matching %s", deleted, pattern)
        return deleted

    async def clear(self) -> None:
        await self.delete_pattern(f"{self._namespace}:*")

    async def close(self) -> None:
        await self._client.aclose()

    async def _scan(self, pattern: str):
        cursor = 0
        while True:
            cursor, keys = await self._client.scan(cursor, match=pattern, count=SCAN_BATCH)
            if keys:
                yield keys
            if cursor == 0:
                return
