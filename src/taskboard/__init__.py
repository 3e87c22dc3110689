"""taskboard - task and project management API with read-through caching.

Users, projects and tasks live in SQLite; reads go through a
read-through cache whose entries are evicted declaratively: every
mutation names the key families it affects and ``KeyInvalidator``
resolves them into concrete keys before the write happens.

Example:
    from taskboard.api import Settings, create_app

    app = create_app(Settings(jwt_secret="change-me"))
"""

from taskboard.core.entities import (
    CacheConfig,
    CacheKey,
    KeyFamily,
    Mutation,
    Project,
    Task,
    TaskStatus,
    User,
)
from taskboard.core.services import (
    CachedQueries,
    CacheService,
    InvalidationPolicy,
    KeyInvalidator,
    ProjectService,
    TaskService,
    UserService,
)
from taskboard.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    JsonSerializer,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entities
    "CacheConfig",
    "CacheKey",
    "KeyFamily",
    "Mutation",
    "User",
    "Project",
    "Task",
    "TaskStatus",
    # Services
    "CacheService",
    "CachedQueries",
    "InvalidationPolicy",
    "KeyInvalidator",
    "UserService",
    "ProjectService",
    "TaskService",
    # Infrastructure
    "InMemoryCacheBackend",
    "DefaultKeyBuilder",
    "JsonSerializer",
]
