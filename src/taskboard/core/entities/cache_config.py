"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta

INVALIDATION_MODES = ("complete", "minimal")


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides configuration options for the caching system,
    including TTL defaults, size limits and the invalidation policy.

    Invalidation modes:
        complete: every mutation evicts every key family whose result
            could change, including per-user, per-status and search
            listings.
        minimal: only entity keys and top-level listings are evicted,
            so per-user, per-status and search listings stay stale
            until their TTL elapses.
    """

    enabled: bool = True
    default_ttl: timedelta | None = None
    max_size: int | None = None  # None = unbounded
    key_prefix: str = "taskboard"
    invalidation: str = "complete"

    def __post_init__(self) -> None:
        """Set default TTL if not provided and validate the mode."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(minutes=5)
        if self.invalidation not in INVALIDATION_MODES:
            raise ValueError(
                f"invalidation must be one of {INVALIDATION_MODES}, "
                f"got {self.invalidation!r}"
            )
