"""Pytest configuration for taskboard tests."""

from collections.abc import AsyncIterator
from datetime import timedelta

import pytest

from taskboard import (
    CacheConfig,
    CacheService,
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    JsonSerializer,
)
from taskboard.infrastructure.repositories import SqliteDatabase


class FakeClock:
    """Monotonic clock advanced by hand, for cache expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend(clock: FakeClock) -> InMemoryCacheBackend:
    """In-memory backend driven by the fake clock."""
    return InMemoryCacheBackend(default_ttl=300.0, timer=clock)


@pytest.fixture
def cache_service(backend: InMemoryCacheBackend) -> CacheService:
    """Create a cache service for testing."""
    return CacheService(
        backend=backend,
        key_builder=DefaultKeyBuilder(),
        serializer=JsonSerializer(),
        config=CacheConfig(default_ttl=timedelta(minutes=5)),
    )


@pytest.fixture
async def database() -> AsyncIterator[SqliteDatabase]:
    """A fresh in-memory SQLite database with the schema applied."""
    db = SqliteDatabase(":memory:")
    await db.connect()
    yield db
    await db.close()
