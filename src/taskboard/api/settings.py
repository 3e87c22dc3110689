"""Application settings read from the environment."""

import os
from dataclasses import dataclass, field
from datetime import timedelta

from taskboard.core.entities.cache_config import INVALIDATION_MODES, CacheConfig

CACHE_BACKENDS = ("memory", "redis")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_optional_int(name: str) -> int | None:
    if not os.getenv(name):
        return None
    return _env_int(name, 0)


@dataclass
class Settings:
    """Runtime configuration for the API process.

    Fields other than ``cors_origins`` read an environment variable
    prefixed with ``TASKBOARD_`` (``DEBUG`` excepted). Only the JWT
    secret has no default.
    """

    jwt_secret: str
    database_path: str = "taskboard.db"
    jwt_expires_minutes: int = 60
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300
    cache_max_size: int | None = None
    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379"
    invalidation: str = "complete"
    password_iterations: int = 100_000
    log_level: str = "INFO"
    debug: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        if not self.jwt_secret:
            raise ValueError("TASKBOARD_JWT_SECRET is required")
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"cache backend must be one of {CACHE_BACKENDS}, got {self.cache_backend!r}"
            )
        if self.invalidation not in INVALIDATION_MODES:
            raise ValueError(
                f"invalidation must be one of {INVALIDATION_MODES}, got {self.invalidation!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If a variable is missing or malformed.
        """
        return cls(
            jwt_secret=os.getenv("TASKBOARD_JWT_SECRET", ""),
            database_path=os.getenv("TASKBOARD_DATABASE_PATH", "taskboard.db"),
            jwt_expires_minutes=_env_int("TASKBOARD_JWT_EXPIRES_MINUTES", 60),
            cache_enabled=_env_bool("TASKBOARD_CACHE_ENABLED", True),
            cache_ttl_seconds=_env_int("TASKBOARD_CACHE_TTL_SECONDS", 300),
            cache_max_size=_env_optional_int("TASKBOARD_CACHE_MAX_SIZE"),
            cache_backend=os.getenv("TASKBOARD_CACHE_BACKEND", "memory").lower(),
            redis_url=os.getenv("TASKBOARD_REDIS_URL", "redis://localhost:6379"),
            invalidation=os.getenv("TASKBOARD_INVALIDATION", "complete").lower(),
            password_iterations=_env_int("TASKBOARD_PASSWORD_ITERATIONS", 100_000),
            log_level=os.getenv("TASKBOARD_LOG_LEVEL", "INFO").upper(),
            debug=_env_bool("DEBUG", False),
        )

    @property
    def jwt_expires_in(self) -> timedelta:
        return timedelta(minutes=self.jwt_expires_minutes)

    def cache_config(self) -> CacheConfig:
        return CacheConfig(
            enabled=self.cache_enabled,
            default_ttl=timedelta(seconds=self.cache_ttl_seconds),
            max_size=self.cache_max_size,
            invalidation=self.invalidation,
        )
