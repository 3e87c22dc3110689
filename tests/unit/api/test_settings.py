"""Tests for environment-driven settings and service wiring."""

from datetime import timedelta

import pytest

from taskboard.api.dependencies import build_cache_backend, build_container
from taskboard.api.settings import Settings
from taskboard.infrastructure.backends import InMemoryCacheBackend


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TASKBOARD_JWT_SECRET",
        "TASKBOARD_DATABASE_PATH",
        "TASKBOARD_JWT_EXPIRES_MINUTES",
        "TASKBOARD_CACHE_ENABLED",
        "TASKBOARD_CACHE_TTL_SECONDS",
        "TASKBOARD_CACHE_MAX_SIZE",
        "TASKBOARD_CACHE_BACKEND",
        "TASKBOARD_REDIS_URL",
        "TASKBOARD_INVALIDATION",
        "TASKBOARD_PASSWORD_ITERATIONS",
        "TASKBOARD_LOG_LEVEL",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKBOARD_JWT_SECRET", "s3cret")

        settings = Settings.from_env()

        assert settings.database_path == "taskboard.db"
        assert settings.jwt_expires_in == timedelta(hours=1)
        assert settings.cache_backend == "memory"
        assert settings.invalidation == "complete"
        assert settings.cache_config().default_ttl == timedelta(seconds=300)

    def test_secret_required(self) -> None:
        with pytest.raises(ValueError, match="TASKBOARD_JWT_SECRET"):
            Settings.from_env()

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKBOARD_JWT_SECRET", "s3cret")
        monkeypatch.setenv("TASKBOARD_CACHE_ENABLED", "false")
        monkeypatch.setenv("TASKBOARD_CACHE_TTL_SECONDS", "30")
        monkeypatch.setenv("TASKBOARD_INVALIDATION", "MINIMAL")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings.from_env()
        config = settings.cache_config()

        assert config.enabled is False
        assert config.default_ttl == timedelta(seconds=30)
        assert config.invalidation == "minimal"
        assert settings.debug is True

    @pytest.mark.parametrize(
        "name,value",
        [
            ("TASKBOARD_CACHE_TTL_SECONDS", "soon"),
            ("TASKBOARD_CACHE_TTL_SECONDS", "0"),
            ("TASKBOARD_CACHE_ENABLED", "maybe"),
            ("TASKBOARD_CACHE_BACKEND", "memcached"),
            ("TASKBOARD_INVALIDATION", "lazy"),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        monkeypatch.setenv("TASKBOARD_JWT_SECRET", "s3cret")
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError):
            Settings.from_env()


class TestWiring:
    def test_memory_backend_by_default(self) -> None:
        backend = build_cache_backend(Settings(jwt_secret="s3cret"))
        assert isinstance(backend, InMemoryCacheBackend)

    def test_redis_backend_selected(self) -> None:
        from taskboard.infrastructure.backends.redis import RedisCacheBackend

        settings = Settings(jwt_secret="s3cret", cache_backend="redis")

        assert isinstance(build_cache_backend(settings), RedisCacheBackend)

    def test_container_uses_configured_policy(self) -> None:
        container = build_container(Settings(jwt_secret="s3cret", invalidation="minimal"))

        assert container.cache.config.invalidation == "minimal"
        assert container.cache.config.key_prefix == "taskboard"

    def test_max_size_reaches_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKBOARD_JWT_SECRET", "s3cret")
        monkeypatch.setenv("TASKBOARD_CACHE_MAX_SIZE", "50")

        settings = Settings.from_env()

        assert settings.cache_config().max_size == 50
        assert build_cache_backend(settings).maxsize == 50
