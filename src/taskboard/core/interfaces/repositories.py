"""Repository interfaces for the persistent store.

Repositories know nothing about caching. Collections are always lists
(empty when nothing matches) in insertion order; single-entity writes
return None when the target does not exist. Store failures surface as
``StoreUnavailableError``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from taskboard.core.entities.models import Project, Task, TaskStatus, User


@dataclass(frozen=True)
class TaskFilter:
    """Query-by-filter criteria for tasks. Unset fields match everything."""

    project_id: str | None = None
    status: TaskStatus | None = None
    assigned_to: str | None = None
    search_term: str | None = None


class IUserRepository(Protocol):
    """Contract for user persistence."""

    async def create(self, username: str, email: str, password_hash: str) -> User:
        ...

    async def get(self, user_id: str) -> User | None:
        ...

    async def list_all(self) -> list[User]:
        ...

    async def find_by_email(self, email: str) -> User | None:
        ...

    async def find_by_username(self, username: str) -> User | None:
        ...

    async def get_credentials(self, email: str) -> tuple[User, str] | None:
        """Return the user and stored password hash for an email."""
        ...


class IProjectRepository(Protocol):
    """Contract for project persistence."""

    async def create(self, name: str, owner: str, description: str | None = None) -> Project:
        ...

    async def get(self, project_id: str) -> Project | None:
        ...

    async def list_all(self) -> list[Project]:
        ...

    async def list_by_user(self, user_id: str) -> list[Project]:
        """Projects the user owns or is a member of."""
        ...

    async def update(self, project_id: str, patch: dict[str, Any]) -> Project | None:
        ...

    async def delete(self, project_id: str) -> Project | None:
        ...

    async def add_member(self, project_id: str, user_id: str) -> Project | None:
        ...

    async def remove_member(self, project_id: str, user_id: str) -> Project | None:
        ...


class ITaskRepository(Protocol):
    """Contract for task persistence."""

    async def create(
        self,
        title: str,
        project: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        assigned_to: tuple[str, ...] = (),
        due_date: datetime | None = None,
    ) -> Task:
        ...

    async def get(self, task_id: str) -> Task | None:
        ...

    async def find(self, task_filter: TaskFilter) -> list[Task]:
        ...

    async def update(self, task_id: str, patch: dict[str, Any]) -> Task | None:
        ...

    async def delete(self, task_id: str) -> Task | None:
        ...

    async def delete_by_project(self, project_id: str) -> list[Task]:
        """Delete every task of a project, returning the deleted tasks."""
        ...

    async def add_assignees(self, task_id: str, user_ids: list[str]) -> Task | None:
        ...

    async def remove_assignee(self, task_id: str, user_id: str) -> Task | None:
        ...
