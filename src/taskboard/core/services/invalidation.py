"""Declarative cache invalidation.

Every mutation maps to the key families whose cached results it can
change. Services never delete keys themselves: they describe the write
(ids, owner, assignees, statuses) and ``KeyInvalidator`` resolves the
table entry into concrete keys and family-wide patterns.

Two tables exist. ``MINIMAL_FANOUT`` evicts only the entity
keys and top-level listings, leaving per-user, per-status and search
listings to expire on their own. ``COMPLETE_FANOUT`` extends it with every
family a mutation can affect.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.entities.mutation import Mutation
from taskboard.core.services.cache_service import CacheService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyTarget:
    """One row item of a fan-out table.

    ``param`` names the mutation parameter holding the key's value (or
    an iterable of values). A parametrised family without ``param``
    targets the whole family.
    """

    family: KeyFamily
    param: str | None = None

    @property
    def whole_family(self) -> bool:
        return self.family.is_parametrised and self.param is None


FanoutTable = Mapping[Mutation, tuple[KeyTarget, ...]]

_ALL_USERS = KeyTarget(KeyFamily.ALL_USERS)
_ALL_PROJECTS = KeyTarget(KeyFamily.ALL_PROJECTS)
_ALL_TASKS = KeyTarget(KeyFamily.ALL_TASKS)
_ANY_SEARCH = KeyTarget(KeyFamily.TASK_SEARCH)

# Task listings that contain a given task, other than allTasks
_TASK_LISTINGS = (
    KeyTarget(KeyFamily.TASKS_BY_PROJECT, "project_id"),
    KeyTarget(KeyFamily.TASKS_BY_USER, "assignees"),
    KeyTarget(KeyFamily.TASKS_BY_STATUS, "statuses"),
    _ANY_SEARCH,
)

MINIMAL_FANOUT: FanoutTable = {
    Mutation.CREATE_USER: (_ALL_USERS,),
    Mutation.CREATE_PROJECT: (_ALL_PROJECTS,),
    Mutation.UPDATE_PROJECT: (KeyTarget(KeyFamily.PROJECT, "project_id"),),
    Mutation.DELETE_PROJECT: (
        _ALL_PROJECTS,
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "owner"),
        KeyTarget(KeyFamily.PROJECT, "project_id"),
    ),
    Mutation.ADD_PROJECT_MEMBER: (KeyTarget(KeyFamily.PROJECTS_BY_USER, "owner"),),
    Mutation.REMOVE_PROJECT_MEMBER: (KeyTarget(KeyFamily.PROJECTS_BY_USER, "owner"),),
    Mutation.CREATE_TASK: (_ALL_TASKS,),
    Mutation.UPDATE_TASK: (KeyTarget(KeyFamily.TASK, "task_id"),),
    Mutation.DELETE_TASK: (_ALL_TASKS, KeyTarget(KeyFamily.TASK, "task_id")),
    Mutation.ASSIGN_TASK: (KeyTarget(KeyFamily.TASK, "task_id"), _ALL_TASKS),
    Mutation.UNASSIGN_TASK: (KeyTarget(KeyFamily.TASK, "task_id"), _ALL_TASKS),
}

_COMPLETE_EXTRAS: FanoutTable = {
    Mutation.CREATE_PROJECT: (KeyTarget(KeyFamily.PROJECTS_BY_USER, "owner"),),
    Mutation.UPDATE_PROJECT: (
        _ALL_PROJECTS,
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "owner"),
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "members"),
    ),
    Mutation.DELETE_PROJECT: (
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "members"),
        _ALL_TASKS,
        KeyTarget(KeyFamily.TASK, "task_ids"),
        *_TASK_LISTINGS,
    ),
    Mutation.ADD_PROJECT_MEMBER: (
        _ALL_PROJECTS,
        KeyTarget(KeyFamily.PROJECT, "project_id"),
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "member_id"),
    ),
    Mutation.REMOVE_PROJECT_MEMBER: (
        _ALL_PROJECTS,
        KeyTarget(KeyFamily.PROJECT, "project_id"),
        KeyTarget(KeyFamily.PROJECTS_BY_USER, "member_id"),
    ),
    Mutation.CREATE_TASK: _TASK_LISTINGS,
    Mutation.UPDATE_TASK: (_ALL_TASKS, *_TASK_LISTINGS),
    Mutation.DELETE_TASK: _TASK_LISTINGS,
    Mutation.ASSIGN_TASK: _TASK_LISTINGS,
    Mutation.UNASSIGN_TASK: _TASK_LISTINGS,
}

COMPLETE_FANOUT: FanoutTable = {
    mutation: targets + _COMPLETE_EXTRAS.get(mutation, ())
    for mutation, targets in MINIMAL_FANOUT.items()
}


class InvalidationPolicy:
    """Resolves a fan-out table entry into concrete keys and families."""

    def __init__(self, table: FanoutTable) -> None:
        missing = set(Mutation) - set(table)
        if missing:
            names = ", ".join(sorted(m.value for m in missing))
            raise ValueError(f"fan-out table has no entry for: {names}")
        self._table = table

    @classmethod
    def for_mode(cls, mode: str) -> "InvalidationPolicy":
        """Build the policy for a ``CacheConfig.invalidation`` mode."""
        if mode == "complete":
            return cls(COMPLETE_FANOUT)
        if mode == "minimal":
            return cls(MINIMAL_FANOUT)
        raise ValueError(f"unknown invalidation mode: {mode!r}")

    def targets(self, mutation: Mutation) -> tuple[KeyTarget, ...]:
        return self._table[mutation]

    def resolve(
        self,
        mutation: Mutation,
        params: Mapping[str, Any],
    ) -> tuple[list[CacheKey], list[KeyFamily]]:
        """Expand a mutation into the keys and whole families to evict.

        Args:
            mutation: The write being performed.
            params: Values for the parameters named by the table.

        Returns:
            A tuple of (keys, families), each without duplicates and in
            table order.

        Raises:
            ValueError: If the table names a parameter that was not passed.
        """
        keys: dict[CacheKey, None] = {}
        families: dict[KeyFamily, None] = {}

        for target in self._table[mutation]:
            if target.whole_family:
                families[target.family] = None
                continue
            if target.param is None:
                keys[CacheKey.of(target.family)] = None
                continue
            if target.param not in params:
                raise ValueError(
                    f"{mutation.value} invalidation requires parameter {target.param!r}"
                )
            for value in _expand(params[target.param]):
                keys[CacheKey.of(target.family, value)] = None

        return list(keys), list(families)


def _expand(value: Any) -> Iterable[str]:
    """Normalise a parameter into zero or more key parameters."""
    if value is None:
        return []
    if isinstance(value, (str, Enum)):
        value = [value]
    return [item.value if isinstance(item, Enum) else str(item) for item in value if item is not None]


class KeyInvalidator:
    """Evicts the cache keys a mutation can affect, using one policy."""

    def __init__(self, cache: CacheService, policy: InvalidationPolicy) -> None:
        self._cache = cache
        self._policy = policy

    @property
    def policy(self) -> InvalidationPolicy:
        return self._policy

    async def invalidate(self, mutation: Mutation, **params: Any) -> int:
        """Evict every key the mutation could change.

        Args:
            mutation: The write about to be performed.
            **params: Values used to resolve parametrised key families.

        Returns:
            Number of entries evicted.
        """
        keys, families = self._policy.resolve(mutation, params)

        count = 0
        for key in keys:
            if await self._cache.delete(key):
                count += 1
        for family in families:
            count += await self._cache.delete_family(family)

        logger.debug(
            "invalidated %d entries for %s (keys=%s, families=%s)",
            count,
            mutation.value,
            [str(key) for key in keys],
            [family.value for family in families],
        )
        return count
