"""Core domain layer for taskboard."""

from taskboard.core.entities import CacheConfig, CacheEntry, CacheKey, KeyFamily, Mutation
from taskboard.core.exceptions import (
    NotFoundError,
    StoreUnavailableError,
    TaskboardError,
    UnauthorizedError,
    ValidationFailure,
)
from taskboard.core.interfaces import (
    ICacheBackend,
    IInvalidator,
    IKeyBuilder,
    ISerializer,
)
from taskboard.core.services import CacheService, KeyInvalidator

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "KeyFamily",
    "Mutation",
    # Errors
    "TaskboardError",
    "ValidationFailure",
    "UnauthorizedError",
    "NotFoundError",
    "StoreUnavailableError",
    # Interfaces
    "ICacheBackend",
    "IKeyBuilder",
    "ISerializer",
    "IInvalidator",
    # Services
    "CacheService",
    "KeyInvalidator",
]
