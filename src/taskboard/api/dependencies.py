"""Service wiring and FastAPI dependencies."""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.api.settings import Settings
from taskboard.core.exceptions import UnauthorizedError
from taskboard.core.interfaces.cache_backend import ICacheBackend
from taskboard.core.services import (
    CacheService,
    InvalidationPolicy,
    KeyInvalidator,
    PasswordHasher,
    ProjectService,
    TaskService,
    TokenManager,
    UserService,
)
from taskboard.infrastructure.backends import InMemoryCacheBackend
from taskboard.infrastructure.key_builders import DefaultKeyBuilder
from taskboard.infrastructure.repositories import (
    SqliteDatabase,
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)
from taskboard.infrastructure.serializers import JsonSerializer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Container:
    """Everything a request handler can reach, built once per process."""

    settings: Settings
    database: SqliteDatabase
    cache: CacheService
    tokens: TokenManager
    users: UserService
    projects: ProjectService
    tasks: TaskService

    async def startup(self) -> None:
        await self.database.connect()

    async def shutdown(self) -> None:
        await self.cache.backend.close()
        await self.database.close()


def build_cache_backend(settings: Settings) -> ICacheBackend:
    if settings.cache_backend == "redis":
        # redis is an optional extra, only imported when selected
        from taskboard.infrastructure.backends.redis import RedisCacheBackend

        logger.info("using redis cache backend at %s", settings.redis_url)
        return RedisCacheBackend(
            redis_url=settings.redis_url,
            namespace=settings.cache_config().key_prefix,
            default_ttl=settings.cache_ttl_seconds,
        )
    return InMemoryCacheBackend(
        maxsize=settings.cache_max_size,
        default_ttl=float(settings.cache_ttl_seconds),
    )


def build_container(settings: Settings, backend: ICacheBackend | None = None) -> Container:
    """Wire repositories, cache and services for one process."""
    config = settings.cache_config()
    cache = CacheService(
        backend=backend or build_cache_backend(settings),
        key_builder=DefaultKeyBuilder(prefix=config.key_prefix),
        serializer=JsonSerializer(),
        config=config,
    )
    invalidator = KeyInvalidator(cache, InvalidationPolicy.for_mode(config.invalidation))

    database = SqliteDatabase(settings.database_path)
    user_repo = SqliteUserRepository(database)
    project_repo = SqliteProjectRepository(database)
    task_repo = SqliteTaskRepository(database)

    tokens = TokenManager(settings.jwt_secret, expires_in=settings.jwt_expires_in)
    hasher = PasswordHasher(iterations=settings.password_iterations)

    return Container(
        settings=settings,
        database=database,
        cache=cache,
        tokens=tokens,
        users=UserService(user_repo, cache, invalidator, hasher, tokens),
        projects=ProjectService(project_repo, task_repo, user_repo, cache, invalidator),
        tasks=TaskService(task_repo, project_repo, user_repo, cache, invalidator),
    )


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_user_service(container: Container = Depends(get_container)) -> UserService:
    return container.users


def get_project_service(container: Container = Depends(get_container)) -> ProjectService:
    return container.projects


def get_task_service(container: Container = Depends(get_container)) -> TaskService:
    return container.tasks


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    container: Container = Depends(get_container),
) -> str:
    """Resolve the principal from the bearer token.

    Raises:
        UnauthorizedError: If no token is sent or it fails verification.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")
    return container.tokens.verify(credentials.credentials)
