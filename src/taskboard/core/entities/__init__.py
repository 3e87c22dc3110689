"""Domain entities for taskboard."""

from taskboard.core.entities.cache_config import CacheConfig
from taskboard.core.entities.cache_entry import CacheEntry
from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.entities.models import Project, Task, TaskStatus, User
from taskboard.core.entities.mutation import Mutation

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CacheConfig",
    "KeyFamily",
    "Mutation",
    "User",
    "Project",
    "Task",
    "TaskStatus",
]
