"""Persistent store implementations."""

from taskboard.infrastructure.repositories.sqlite import (
    SqliteDatabase,
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)

__all__ = [
    "SqliteDatabase",
    "SqliteUserRepository",
    "SqliteProjectRepository",
    "SqliteTaskRepository",
]
