"""Infrastructure layer implementations for taskboard."""

from taskboard.infrastructure.backends import InMemoryCacheBackend
from taskboard.infrastructure.key_builders import DefaultKeyBuilder
from taskboard.infrastructure.repositories import (
    SqliteDatabase,
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)
from taskboard.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
    "SqliteDatabase",
    "SqliteUserRepository",
    "SqliteProjectRepository",
    "SqliteTaskRepository",
]
