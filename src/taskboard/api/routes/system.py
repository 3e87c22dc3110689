"""Health and cache inspection routes."""

from typing import Any

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import Container, get_container, get_current_user_id

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(container: Container = Depends(get_container)) -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "cache_enabled": container.cache.config.enabled,
        "cache_backend": container.settings.cache_backend,
    }


@router.get("/api/cache/stats", dependencies=[Depends(get_current_user_id)])
async def cache_stats(container: Container = Depends(get_container)) -> dict[str, Any]:
    """Get cache statistics."""
    config = container.cache.config
    return {
        "stats": container.cache.stats,
        "config": {
            "enabled": config.enabled,
            "default_ttl_seconds": config.default_ttl.total_seconds(),
            "key_prefix": config.key_prefix,
            "invalidation": config.invalidation,
        },
    }
