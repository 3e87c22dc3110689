"""Tests for the SQLite repositories."""

import sqlite3
from datetime import datetime, timezone
from unittest.mock import patch

import aiosqlite
import pytest

from taskboard.core.entities.models import TaskStatus
from taskboard.core.exceptions import StoreUnavailableError, ValidationFailure
from taskboard.core.interfaces.repositories import TaskFilter
from taskboard.infrastructure.repositories import (
    SqliteDatabase,
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)


@pytest.fixture
def users(database: SqliteDatabase) -> SqliteUserRepository:
    return SqliteUserRepository(database)


@pytest.fixture
def projects(database: SqliteDatabase) -> SqliteProjectRepository:
    return SqliteProjectRepository(database)


@pytest.fixture
def tasks(database: SqliteDatabase) -> SqliteTaskRepository:
    return SqliteTaskRepository(database)


class TestUserRepository:
    async def test_create_and_get(self, users: SqliteUserRepository) -> None:
        user = await users.create("alice", "alice@example.com", "hash")

        assert len(user.id) == 32
        assert await users.get(user.id) == user
        assert await users.find_by_email("alice@example.com") == user
        assert await users.find_by_username("alice") == user

    async def test_credentials_include_hash(self, users: SqliteUserRepository) -> None:
        user = await users.create("alice", "alice@example.com", "secret-hash")

        assert await users.get_credentials("alice@example.com") == (user, "secret-hash")
        assert await users.get_credentials("nobody@example.com") is None

    async def test_list_is_insertion_ordered(self, users: SqliteUserRepository) -> None:
        first = await users.create("alice", "a@example.com", "h")
        second = await users.create("bob", "b@example.com", "h")

        assert await users.list_all() == [first, second]

    @pytest.mark.parametrize(
        "username,email", [("other", "a@example.com"), ("alice", "other@example.com")]
    )
    async def test_unique_violation_is_validation_failure(
        self, users: SqliteUserRepository, username: str, email: str
    ) -> None:
        await users.create("alice", "a@example.com", "h")

        with pytest.raises(ValidationFailure, match="already exists") as exc_info:
            await users.create(username, email, "h")
        assert exc_info.value.status_code == 400
        assert len(await users.list_all()) == 1


class TestProjectRepository:
    async def test_list_by_user_covers_owner_and_members(
        self, projects: SqliteProjectRepository
    ) -> None:
        owned = await projects.create("Owned", owner="u1")
        shared = await projects.create("Shared", owner="u2")
        await projects.create("Other", owner="u3")
        shared = await projects.add_member(shared.id, "u1")

        assert await projects.list_by_user("u1") == [owned, shared]
        assert await projects.list_by_user("nobody") == []

    async def test_members_are_a_set(self, projects: SqliteProjectRepository) -> None:
        project = await projects.create("Proj", owner="u1")

        await projects.add_member(project.id, "u2")
        await projects.add_member(project.id, "u3")
        updated = await projects.add_member(project.id, "u2")

        assert updated.members == ("u2", "u3")

    async def test_remove_member(self, projects: SqliteProjectRepository) -> None:
        project = await projects.create("Proj", owner="u1")
        await projects.add_member(project.id, "u2")

        updated = await projects.remove_member(project.id, "u2")
        assert updated.members == ()

        # Removing a non-member leaves the project untouched
        assert await projects.remove_member(project.id, "u9") == updated

    async def test_update_and_delete(self, projects: SqliteProjectRepository) -> None:
        project = await projects.create("Proj", owner="u1", description="old")

        updated = await projects.update(project.id, {"description": "new"})
        assert updated.description == "new"
        assert updated.name == "Proj"

        assert await projects.delete(project.id) == updated
        assert await projects.get(project.id) is None

    async def test_missing_targets_return_none(self, projects: SqliteProjectRepository) -> None:
        assert await projects.update("missing", {"name": "x"}) is None
        assert await projects.delete("missing") is None
        assert await projects.add_member("missing", "u1") is None


class TestTaskRepository:
    async def test_create_round_trips_dates(self, tasks: SqliteTaskRepository) -> None:
        due = datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)
        task = await tasks.create("Write docs", project="p1", due_date=due)

        loaded = await tasks.get(task.id)
        assert loaded == task
        assert loaded.due_date == due
        assert loaded.status is TaskStatus.PENDING

    async def test_find_by_each_filter(self, tasks: SqliteTaskRepository) -> None:
        a = await tasks.create("Alpha task", project="p1", assigned_to=("u1",))
        b = await tasks.create(
            "Beta task", project="p1", status=TaskStatus.COMPLETED, description="has ALPHA inside"
        )
        c = await tasks.create("Gamma", project="p2", assigned_to=("u1", "u2"))

        assert await tasks.find(TaskFilter()) == [a, b, c]
        assert await tasks.find(TaskFilter(project_id="p1")) == [a, b]
        assert await tasks.find(TaskFilter(status=TaskStatus.COMPLETED)) == [b]
        assert await tasks.find(TaskFilter(assigned_to="u1")) == [a, c]
        assert await tasks.find(TaskFilter(search_term="alpha")) == [a, b]
        assert await tasks.find(TaskFilter(project_id="p1", assigned_to="u2")) == []

    async def test_search_is_literal(self, tasks: SqliteTaskRepository) -> None:
        """Wildcard characters in a search term match only themselves."""
        await tasks.create("Plain", project="p1")
        hit = await tasks.create("100% done", project="p1")

        assert await tasks.find(TaskFilter(search_term="%")) == [hit]

    async def test_search_keeps_whitespace(self, tasks: SqliteTaskRepository) -> None:
        await tasks.create("foo bar", project="p1")
        spaced = await tasks.create("foo  bar", project="p1")

        assert await tasks.find(TaskFilter(search_term="foo  bar")) == [spaced]

    async def test_search_folds_non_ascii_case(self, tasks: SqliteTaskRepository) -> None:
        by_title = await tasks.create("ÉCOLE visit", project="p1")
        by_description = await tasks.create("Trip", project="p1", description="Straße closed")
        await tasks.create("Ecole", project="p1")

        assert await tasks.find(TaskFilter(search_term="école")) == [by_title]
        assert await tasks.find(TaskFilter(search_term="STRASSE")) == [by_description]

    async def test_assignees_are_ordered_set(self, tasks: SqliteTaskRepository) -> None:
        task = await tasks.create("Task", project="p1", assigned_to=("u1",))

        updated = await tasks.add_assignees(task.id, ["u2", "u1", "u3"])
        assert updated.assigned_to == ("u1", "u2", "u3")

        updated = await tasks.remove_assignee(task.id, "u2")
        assert updated.assigned_to == ("u1", "u3")

    async def test_update_status(self, tasks: SqliteTaskRepository) -> None:
        task = await tasks.create("Task", project="p1")

        updated = await tasks.update(task.id, {"status": TaskStatus.IN_PROGRESS})

        assert updated.status is TaskStatus.IN_PROGRESS
        assert updated.title == "Task"

    async def test_delete_by_project(self, tasks: SqliteTaskRepository) -> None:
        a = await tasks.create("One", project="p1")
        keep = await tasks.create("Two", project="p2")
        b = await tasks.create("Three", project="p1")

        assert await tasks.delete_by_project("p1") == [a, b]
        assert await tasks.find(TaskFilter()) == [keep]


class TestSqliteDatabase:
    async def test_unconnected_database_is_unavailable(self) -> None:
        db = SqliteDatabase(":memory:")
        with pytest.raises(StoreUnavailableError):
            await SqliteUserRepository(db).list_all()

    async def test_driver_errors_are_wrapped(self, database: SqliteDatabase) -> None:
        failing = sqlite3.OperationalError("disk I/O error")
        with patch.object(
            aiosqlite.Connection, "execute", side_effect=failing
        ), pytest.raises(StoreUnavailableError) as exc_info:
            await SqliteUserRepository(database).list_all()

        assert exc_info.value.__cause__ is failing
