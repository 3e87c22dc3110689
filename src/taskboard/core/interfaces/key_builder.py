"""Key builder interface."""

from typing import Protocol

from taskboard.core.entities.cache_key import CacheKey, KeyFamily


class IKeyBuilder(Protocol):
    """Contract for turning cache key value objects into backend keys."""

    def build(self, key: CacheKey) -> str:
        """Build the backend key string for a cache key.

        Args:
            key: The structured cache key.

        Returns:
            A unique, deterministic string key.
        """
        ...

    def build_pattern(self, family: KeyFamily) -> str:
        """Build a glob pattern matching every key of a family.

        Args:
            family: The key family.

        Returns:
            A glob pattern suitable for ``ICacheBackend.delete_pattern``.
        """
        ...
