"""Core interfaces (Protocol classes) for taskboard."""

from taskboard.core.interfaces.cache_backend import ICacheBackend
from taskboard.core.interfaces.invalidator import IInvalidator
from taskboard.core.interfaces.key_builder import IKeyBuilder
from taskboard.core.interfaces.repositories import (
    IProjectRepository,
    ITaskRepository,
    IUserRepository,
    TaskFilter,
)
from taskboard.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IInvalidator",
    "IUserRepository",
    "IProjectRepository",
    "ITaskRepository",
    "TaskFilter",
]
