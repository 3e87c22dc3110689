"""Default key builder implementation."""

from taskboard.core.entities.cache_key import CacheKey, KeyFamily


class DefaultKeyBuilder:
    """Default key builder joining prefix, family and parameter with colons.

    ``CacheKey(KeyFamily.TASK, "42")`` becomes ``taskboard:task:42``.
    """

    def __init__(self, prefix: str = "taskboard") -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys.
        """
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def build(self, key: CacheKey) -> str:
        """Build the backend key string for a cache key.

        Args:
            key: The structured cache key.

        Returns:
            A unique string key for caching the query result.
        """
        return f"{self._prefix}:{key}"

    def build_pattern(self, family: KeyFamily) -> str:
        """Build a glob pattern matching every key of a family.

        Args:
            family: The key family.

        Returns:
            The exact key for singleton families, ``prefix:family:*`` otherwise.
        """
        if not family.is_parametrised:
            return f"{self._prefix}:{family.value}"
        return f"{self._prefix}:{family.value}:*"
