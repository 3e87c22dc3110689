"""Tests for CachedQueries."""

from unittest.mock import AsyncMock

import pytest

from taskboard import CacheKey, CachedQueries, CacheService, KeyFamily, Project
from taskboard.core.exceptions import StoreUnavailableError


@pytest.fixture
def queries(cache_service: CacheService) -> CachedQueries[Project]:
    return CachedQueries(cache_service, Project.to_dict, Project.from_dict)


PROJECT = Project(id="p1", name="Proj", owner="u1", members=("u2",))


class TestCachedQueries:
    async def test_one_loads_once(self, queries: CachedQueries[Project]) -> None:
        loader = AsyncMock(return_value=PROJECT)
        key = CacheKey.of(KeyFamily.PROJECT, "p1")

        first = await queries.one(key, loader)
        second = await queries.one(key, loader)

        assert first == second == PROJECT
        loader.assert_awaited_once()

    async def test_absence_not_cached(self, queries: CachedQueries[Project]) -> None:
        loader = AsyncMock(side_effect=[None, PROJECT])
        key = CacheKey.of(KeyFamily.PROJECT, "p1")

        assert await queries.one(key, loader) is None
        assert await queries.one(key, loader) == PROJECT
        assert loader.await_count == 2

    async def test_many_caches_empty_list(self, queries: CachedQueries[Project]) -> None:
        loader = AsyncMock(return_value=[])
        key = CacheKey.of(KeyFamily.PROJECTS_BY_USER, "u9")

        assert await queries.many(key, loader) == []
        assert await queries.many(key, loader) == []
        loader.assert_awaited_once()

    async def test_many_preserves_order(self, queries: CachedQueries[Project]) -> None:
        other = Project(id="p2", name="Other", owner="u1")
        loader = AsyncMock(return_value=[other, PROJECT])
        key = CacheKey.of(KeyFamily.ALL_PROJECTS)

        await queries.many(key, loader)

        assert await queries.many(key, loader) == [other, PROJECT]

    async def test_undecodable_entry_reloads(
        self, cache_service: CacheService, queries: CachedQueries[Project]
    ) -> None:
        key = CacheKey.of(KeyFamily.PROJECT, "p1")
        await cache_service.set(key, {"unexpected": True})
        loader = AsyncMock(return_value=PROJECT)

        assert await queries.one(key, loader) == PROJECT
        loader.assert_awaited_once()
        assert await cache_service.get(key) == PROJECT.to_dict()

    async def test_loader_errors_propagate(self, queries: CachedQueries[Project]) -> None:
        loader = AsyncMock(side_effect=StoreUnavailableError("down"))

        with pytest.raises(StoreUnavailableError):
            await queries.one(CacheKey.of(KeyFamily.PROJECT, "p1"), loader)
