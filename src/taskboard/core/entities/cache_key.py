"""Cache key value objects.

Keys are partitioned into families, one per query shape. A family is
either a singleton (``allTasks``) or parametrised by one value
(``task:<id>``, ``tasksByProject:<projectId>``).
"""

from dataclasses import dataclass
from enum import Enum


class KeyFamily(str, Enum):
    """Known cache key families."""

    ALL_USERS = "allUsers"
    USER = "user"
    ALL_PROJECTS = "allProjects"
    PROJECT = "project"
    PROJECTS_BY_USER = "projectsByUser"
    ALL_TASKS = "allTasks"
    TASK = "task"
    TASKS_BY_PROJECT = "tasksByProject"
    TASKS_BY_USER = "tasksByUser"
    TASKS_BY_STATUS = "tasksByStatus"
    TASK_SEARCH = "searchTasks"

    @property
    def is_parametrised(self) -> bool:
        """Whether keys of this family carry a parameter."""
        return self not in _SINGLETON_FAMILIES


_SINGLETON_FAMILIES = frozenset(
    {KeyFamily.ALL_USERS, KeyFamily.ALL_PROJECTS, KeyFamily.ALL_TASKS}
)


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    Encapsulates the family and parameter that make up a cache key,
    before any prefix is applied by the key builder.
    """

    family: KeyFamily
    param: str | None = None

    def __post_init__(self) -> None:
        """Reject keys whose parameter does not match the family."""
        if self.family.is_parametrised and not self.param:
            raise ValueError(f"{self.family.value} keys require a parameter")
        if not self.family.is_parametrised and self.param is not None:
            raise ValueError(f"{self.family.value} keys take no parameter")

    def __str__(self) -> str:
        """Return the unprefixed cache key string.

        Returns:
            ``family`` or ``family:param``.
        """
        if self.param is None:
            return self.family.value
        return f"{self.family.value}:{self.param}"

    @classmethod
    def of(cls, family: KeyFamily, param: str | None = None) -> "CacheKey":
        """Shorthand constructor accepting non-string parameters.

        Args:
            family: The key family.
            param: The family parameter, converted with ``str``.

        Returns:
            A new CacheKey instance.
        """
        return cls(family=family, param=None if param is None else str(param))
