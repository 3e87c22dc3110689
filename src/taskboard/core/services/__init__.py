"""Domain services for taskboard."""

from taskboard.core.services.auth import PasswordHasher, TokenManager
from taskboard.core.services.cache_service import CacheService
from taskboard.core.services.invalidation import (
    COMPLETE_FANOUT,
    MINIMAL_FANOUT,
    InvalidationPolicy,
    KeyInvalidator,
    KeyTarget,
)
from taskboard.core.services.project_service import ProjectService
from taskboard.core.services.read_through import CachedQueries
from taskboard.core.services.task_service import TaskService
from taskboard.core.services.user_service import UserService

__all__ = [
    "CacheService",
    "CachedQueries",
    # Invalidation
    "InvalidationPolicy",
    "KeyInvalidator",
    "KeyTarget",
    "COMPLETE_FANOUT",
    "MINIMAL_FANOUT",
    # Auth
    "PasswordHasher",
    "TokenManager",
    # Entity services
    "UserService",
    "ProjectService",
    "TaskService",
]
