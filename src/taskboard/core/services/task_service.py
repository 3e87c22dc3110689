"""Cache-aware task service."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.entities.models import Task, TaskStatus
from taskboard.core.entities.mutation import Mutation
from taskboard.core.exceptions import NotFoundError, ValidationFailure
from taskboard.core.interfaces.invalidator import IInvalidator
from taskboard.core.interfaces.repositories import (
    IProjectRepository,
    ITaskRepository,
    IUserRepository,
    TaskFilter,
)
from taskboard.core.services.cache_service import CacheService
from taskboard.core.services.read_through import CachedQueries
from taskboard.utils.hashing import hash_value, normalize_term

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "status", "due_date"})


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


class TaskService:
    def __init__(
        self,
        tasks: ITaskRepository,
        projects: IProjectRepository,
        users: IUserRepository,
        cache: CacheService,
        invalidator: IInvalidator,
    ) -> None:
        self._tasks = tasks
        self._projects = projects
        self._users = users
        self._queries: CachedQueries[Task] = CachedQueries(cache, Task.to_dict, Task.from_dict)
        self._invalidator = invalidator

    async def create_task(
        self,
        title: str,
        project: str,
        description: str | None = None,
        assigned_to: Iterable[str] = (),
        due_date: datetime | None = None,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        """Create a task in an existing project.

        Raises:
            NotFoundError: If the project or any assignee does not exist.
        """
        if await self._projects.get(project) is None:
            raise NotFoundError("Project not found")

        assignees = _unique(assigned_to)
        await self._require_users(assignees)

        await self._invalidator.invalidate(
            Mutation.CREATE_TASK,
            project_id=project,
            assignees=assignees,
            statuses=[status],
        )
        task = await self._tasks.create(
            title=title,
            project=project,
            description=description,
            status=status,
            assigned_to=tuple(assignees),
            due_date=due_date,
        )
        logger.info("created task %s in project %s", task.id, project)
        return task

    async def list_tasks(self) -> list[Task]:
        return await self._queries.many(
            CacheKey.of(KeyFamily.ALL_TASKS),
            lambda: self._tasks.find(TaskFilter()),
        )

    async def get_task(self, task_id: str) -> Task:
        task = await self._queries.one(
            CacheKey.of(KeyFamily.TASK, task_id),
            lambda: self._tasks.get(task_id),
        )
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def list_tasks_for_project(self, project_id: str) -> list[Task]:
        return await self._queries.many(
            CacheKey.of(KeyFamily.TASKS_BY_PROJECT, project_id),
            lambda: self._tasks.find(TaskFilter(project_id=project_id)),
        )

    async def list_tasks_for_user(self, user_id: str) -> list[Task]:
        """Tasks assigned to the user."""
        return await self._queries.many(
            CacheKey.of(KeyFamily.TASKS_BY_USER, user_id),
            lambda: self._tasks.find(TaskFilter(assigned_to=user_id)),
        )

    async def list_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        status = TaskStatus(status)
        return await self._queries.many(
            CacheKey.of(KeyFamily.TASKS_BY_STATUS, status.value),
            lambda: self._tasks.find(TaskFilter(status=status)),
        )

    async def search_tasks(self, term: str) -> list[Task]:
        """Case-insensitive substring search over title and description.

        The term is matched as typed, whitespace included. Searches that
        differ only in case share one cache entry.

        Raises:
            ValidationFailure: If the term is blank.
        """
        if not term or not term.strip():
            raise ValidationFailure("Search term is required")

        return await self._queries.many(
            CacheKey.of(KeyFamily.TASK_SEARCH, hash_value(normalize_term(term))),
            lambda: self._tasks.find(TaskFilter(search_term=term)),
        )

    async def update_task(self, task_id: str, patch: dict[str, Any]) -> Task:
        """Apply a partial update to a task."""
        changes = {field: value for field, value in patch.items() if field in UPDATABLE_FIELDS}
        if changes.get("status") is None:
            changes.pop("status", None)
        else:
            changes["status"] = TaskStatus(changes["status"])

        current = await self._require(task_id)
        statuses = _unique([current.status.value, changes.get("status", current.status).value])

        await self._invalidator.invalidate(
            Mutation.UPDATE_TASK,
            task_id=task_id,
            project_id=current.project,
            assignees=current.assigned_to,
            statuses=statuses,
        )
        updated = await self._tasks.update(task_id, changes)
        if updated is None:
            raise NotFoundError("Task not found")
        return updated

    async def delete_task(self, task_id: str) -> Task:
        """Delete a task, returning the deleted task."""
        current = await self._require(task_id)

        await self._invalidator.invalidate(
            Mutation.DELETE_TASK,
            task_id=task_id,
            project_id=current.project,
            assignees=current.assigned_to,
            statuses=[current.status],
        )
        deleted = await self._tasks.delete(task_id)
        if deleted is None:
            raise NotFoundError("Task not found")

        logger.info("deleted task %s", task_id)
        return deleted

    async def assign_task(self, task_id: str, user_ids: Iterable[str]) -> Task:
        """Add users to a task's assignees, keeping existing order.

        Raises:
            NotFoundError: If the task or any of the users does not exist.
        """
        user_ids = _unique(user_ids)
        if not user_ids:
            raise ValidationFailure("At least one user id is required")

        current = await self._require(task_id)
        await self._require_users(user_ids)

        await self._invalidator.invalidate(
            Mutation.ASSIGN_TASK,
            task_id=task_id,
            project_id=current.project,
            assignees=_unique([*current.assigned_to, *user_ids]),
            statuses=[current.status],
        )
        updated = await self._tasks.add_assignees(task_id, user_ids)
        if updated is None:
            raise NotFoundError("Task not found")
        return updated

    async def unassign_task(self, task_id: str, user_id: str) -> Task:
        """Remove a user from a task's assignees. A non-assignee is a no-op."""
        current = await self._require(task_id)

        await self._invalidator.invalidate(
            Mutation.UNASSIGN_TASK,
            task_id=task_id,
            project_id=current.project,
            assignees=_unique([*current.assigned_to, user_id]),
            statuses=[current.status],
        )
        updated = await self._tasks.remove_assignee(task_id, user_id)
        if updated is None:
            raise NotFoundError("Task not found")
        return updated

    async def _require(self, task_id: str) -> Task:
        task = await self._tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def _require_users(self, user_ids: Iterable[str]) -> None:
        for user_id in user_ids:
            if await self._users.get(user_id) is None:
                raise NotFoundError(f"User {user_id} not found")
