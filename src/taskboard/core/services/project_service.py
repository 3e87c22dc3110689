"""Cache-aware project service.

Every mutation reads what it needs for fan-out from the store, evicts
the affected cache keys, then writes and returns the store's result.
"""

import logging
from typing import Any

from taskboard.core.entities.cache_key import CacheKey, KeyFamily
from taskboard.core.entities.models import Project
from taskboard.core.entities.mutation import Mutation
from taskboard.core.exceptions import NotFoundError
from taskboard.core.interfaces.invalidator import IInvalidator
from taskboard.core.interfaces.repositories import (
    IProjectRepository,
    ITaskRepository,
    IUserRepository,
    TaskFilter,
)
from taskboard.core.services.cache_service import CacheService
from taskboard.core.services.read_through import CachedQueries

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "description"})


class ProjectService:
    def __init__(
        self,
        projects: IProjectRepository,
        tasks: ITaskRepository,
        users: IUserRepository,
        cache: CacheService,
        invalidator: IInvalidator,
    ) -> None:
        self._projects = projects
        self._tasks = tasks
        self._users = users
        self._queries: CachedQueries[Project] = CachedQueries(
            cache, Project.to_dict, Project.from_dict
        )
        self._invalidator = invalidator

    async def create_project(
        self,
        name: str,
        owner: str,
        description: str | None = None,
    ) -> Project:
        await self._invalidator.invalidate(Mutation.CREATE_PROJECT, owner=owner)
        project = await self._projects.create(name=name, owner=owner, description=description)
        logger.info("created project %s for %s", project.id, owner)
        return project

    async def list_projects(self) -> list[Project]:
        return await self._queries.many(
            CacheKey.of(KeyFamily.ALL_PROJECTS), self._projects.list_all
        )

    async def list_projects_for_user(self, user_id: str) -> list[Project]:
        """Projects the user owns or is a member of."""
        return await self._queries.many(
            CacheKey.of(KeyFamily.PROJECTS_BY_USER, user_id),
            lambda: self._projects.list_by_user(user_id),
        )

    async def get_project(self, project_id: str) -> Project:
        project = await self._queries.one(
            CacheKey.of(KeyFamily.PROJECT, project_id),
            lambda: self._projects.get(project_id),
        )
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def update_project(self, project_id: str, patch: dict[str, Any]) -> Project:
        """Apply a partial update to a project's name or description."""
        changes = {field: value for field, value in patch.items() if field in UPDATABLE_FIELDS}
        current = await self._require(project_id)

        await self._invalidator.invalidate(
            Mutation.UPDATE_PROJECT,
            project_id=project_id,
            owner=current.owner,
            members=current.members,
        )
        updated = await self._projects.update(project_id, changes)
        if updated is None:
            raise NotFoundError("Project not found")
        return updated

    async def delete_project(self, project_id: str) -> Project:
        """Delete a project and cascade to its tasks.

        Returns:
            The deleted project.
        """
        project = await self._require(project_id)
        tasks = await self._tasks.find(TaskFilter(project_id=project_id))

        await self._invalidator.invalidate(
            Mutation.DELETE_PROJECT,
            project_id=project_id,
            owner=project.owner,
            members=project.members,
            task_ids=[task.id for task in tasks],
            assignees=sorted({user for task in tasks for user in task.assigned_to}),
            statuses=sorted({task.status.value for task in tasks}),
        )
        removed = await self._tasks.delete_by_project(project_id)
        deleted = await self._projects.delete(project_id)
        if deleted is None:
            raise NotFoundError("Project not found")

        logger.info("deleted project %s and %d tasks", project_id, len(removed))
        return deleted

    async def add_member(self, project_id: str, user_id: str) -> Project:
        """Add a user to a project. Adding an existing member is a no-op."""
        project = await self._require(project_id)
        if await self._users.get(user_id) is None:
            raise NotFoundError("User not found")

        await self._invalidator.invalidate(
            Mutation.ADD_PROJECT_MEMBER,
            project_id=project_id,
            owner=project.owner,
            member_id=user_id,
        )
        updated = await self._projects.add_member(project_id, user_id)
        if updated is None:
            raise NotFoundError("Project not found")
        return updated

    async def remove_member(self, project_id: str, user_id: str) -> Project:
        """Remove a user from a project. Removing a non-member is a no-op."""
        project = await self._require(project_id)

        await self._invalidator.invalidate(
            Mutation.REMOVE_PROJECT_MEMBER,
            project_id=project_id,
            owner=project.owner,
            member_id=user_id,
        )
        updated = await self._projects.remove_member(project_id, user_id)
        if updated is None:
            raise NotFoundError("Project not found")
        return updated

    async def _require(self, project_id: str) -> Project:
        # Fan-out is computed from the store, never from a cached copy
        project = await self._projects.get(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project
