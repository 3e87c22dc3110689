"""Cache invalidator interface."""

from typing import Any, Protocol

from taskboard.core.entities.mutation import Mutation


class IInvalidator(Protocol):
    """Contract for evicting the cache keys a mutation can affect.

    Services call the invalidator before writing to the store, passing
    the identifiers the fan-out depends on (ids, owners, assignees).
    """

    async def invalidate(self, mutation: Mutation, **params: Any) -> int:
        """Evict every key the mutation could change.

        Args:
            mutation: The write about to be performed.
            **params: Values used to resolve parametrised key families.

        Returns:
            Number of entries evicted.
        """
        ...
