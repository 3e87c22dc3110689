"""SQLite repositories backed by a single aiosqlite connection."""

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import aiosqlite

from taskboard.core.entities.models import Project, Task, TaskStatus, User, new_id, utcnow
from taskboard.core.exceptions import StoreUnavailableError, ValidationFailure
from taskboard.core.interfaces.repositories import TaskFilter

logger = logging.getLogger(__name__)


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        email TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        owner TEXT NOT NULL,
        members TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        status TEXT NOT NULL,
        project TEXT NOT NULL,
        assigned_to TEXT NOT NULL DEFAULT '[]',
        due_date TEXT,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks (project)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks (status)",
)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.IntegrityError as e:
        logger.info("store operation %s rejected: %s", operation, e)
        raise ValidationFailure("Username or email already exists") from e
    except sqlite3.Error as e:
        logger.error("store operation %s failed: %s", operation, e)
        raise StoreUnavailableError(f"Store operation failed: {operation}") from e


def _to_text(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _from_text(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


def _row_to_user(row: aiosqlite.Row) -> User:
    """Convert a database row to a user."""
    return User(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        created_at=_from_text(row["created_at"]),
    )


def _row_to_project(row: aiosqlite.Row) -> Project:
    """Convert a database row to a project."""
    return Project(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        owner=row["owner"],
        members=tuple(json.loads(row["members"])),
        created_at=_from_text(row["created_at"]),
    )


def _row_to_task(row: aiosqlite.Row) -> Task:
    """Convert a database row to a task."""
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        project=row["project"],
        assigned_to=tuple(json.loads(row["assigned_to"])),
        due_date=_from_text(row["due_date"]),
        created_at=_from_text(row["created_at"]),
    )


class SqliteDatabase:
    """Owns the process-wide aiosqlite connection and the schema.

    Example:
        database = SqliteDatabase("taskboard.db")
        await database.connect()
        users = SqliteUserRepository(database)
        ...
        await database.close()
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._conn: aiosqlite.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreUnavailableError("Database is not connected")
        return self._conn

    async def connect(self) -> None:
        """Open the connection and create missing tables."""
        if self._conn is not None:
            return
        with _store_errors("connect"):
            self._conn = await aiosqlite.connect(self._path)
            self._conn.row_factory = aiosqlite.Row
            # sqlite's lower() folds ASCII only
            await self._conn.create_function("casefold", 1, _casefold, deterministic=True)
            for statement in SCHEMA:
                await self._conn.execute(statement)
            await self._conn.commit()
        logger.info("connected to sqlite database %s", self._path)

    async def close(self) -> None:
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("closed sqlite database %s", self._path)

    async def fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> aiosqlite.Row | None:
        with _store_errors(query.split(None, 1)[0]):
            cursor = await self.connection.execute(query, params)
            try:
                return await cursor.fetchone()
            finally:
                await cursor.close()

    async def fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[aiosqlite.Row]:
        with _store_errors(query.split(None, 1)[0]):
            cursor = await self.connection.execute(query, params)
            try:
                return list(await cursor.fetchall())
            finally:
                await cursor.close()

    async def execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run a write statement and commit it.

        Returns:
            Number of affected rows.
        """
        with _store_errors(query.split(None, 1)[0]):
            cursor = await self.connection.execute(query, params)
            await self.connection.commit()
            return cursor.rowcount


class SqliteUserRepository:
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    async def create(self, username: str, email: str, password_hash: str) -> User:
        user = User(id=new_id(), username=username, email=email, created_at=utcnow())
        await self._db.execute(
            """INSERT INTO users (id, username, email, password_hash, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user.id, user.username, user.email, password_hash, _to_text(user.created_at)),
        )
        return user

    async def get(self, user_id: str) -> User | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return _row_to_user(row) if row else None

    async def list_all(self) -> list[User]:
        rows = await self._db.fetch_all("SELECT * FROM users ORDER BY rowid")
        return [_row_to_user(row) for row in rows]

    async def find_by_email(self, email: str) -> User | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE email = ?", (email,))
        return _row_to_user(row) if row else None

    async def find_by_username(self, username: str) -> User | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE username = ?", (username,))
        return _row_to_user(row) if row else None

    async def get_credentials(self, email: str) -> tuple[User, str] | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE email = ?", (email,))
        if row is None:
            return None
        return _row_to_user(row), row["password_hash"]


class SqliteProjectRepository:
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    async def create(self, name: str, owner: str, description: str | None = None) -> Project:
        project = Project(
            id=new_id(),
            name=name,
            description=description,
            owner=owner,
            created_at=utcnow(),
        )
        await self._db.execute(
            """INSERT INTO projects (id, name, description, owner, members, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                project.id,
                project.name,
                project.description,
                project.owner,
                json.dumps(list(project.members)),
                _to_text(project.created_at),
            ),
        )
        return project

    async def get(self, project_id: str) -> Project | None:
        row = await self._db.fetch_one("SELECT * FROM projects WHERE id = ?", (project_id,))
        return _row_to_project(row) if row else None

    async def list_all(self) -> list[Project]:
        rows = await self._db.fetch_all("SELECT * FROM projects ORDER BY rowid")
        return [_row_to_project(row) for row in rows]

    async def list_by_user(self, user_id: str) -> list[Project]:
        rows = await self._db.fetch_all(
            """SELECT * FROM projects
               WHERE owner = ?
                  OR EXISTS (SELECT 1 FROM json_each(projects.members) WHERE value = ?)
               ORDER BY rowid""",
            (user_id, user_id),
        )
        return [_row_to_project(row) for row in rows]

    async def update(self, project_id: str, patch: dict[str, Any]) -> Project | None:
        columns = [column for column in ("name", "description") if column in patch]
        if columns:
            assignments = ", ".join(f"{column} = ?" for column in columns)
            values = tuple(patch[column] for column in columns)
            await self._db.execute(
                f"UPDATE projects SET {assignments} WHERE id = ?",
                (*values, project_id),
            )
        return await self.get(project_id)

    async def delete(self, project_id: str) -> Project | None:
        project = await self.get(project_id)
        if project is None:
            return None
        await self._db.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        return project

    async def add_member(self, project_id: str, user_id: str) -> Project | None:
        project = await self.get(project_id)
        if project is None:
            return None
        if user_id in project.members:
            return project
        return await self._set_members(project_id, [*project.members, user_id])

    async def remove_member(self, project_id: str, user_id: str) -> Project | None:
        project = await self.get(project_id)
        if project is None:
            return None
        if user_id not in project.members:
            return project
        return await self._set_members(
            project_id, [member for member in project.members if member != user_id]
        )

    async def _set_members(self, project_id: str, members: list[str]) -> Project | None:
        await self._db.execute(
            "UPDATE projects SET members = ? WHERE id = ?",
            (json.dumps(members), project_id),
        )
        return await self.get(project_id)


class SqliteTaskRepository:
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    async def create(
        self,
        title: str,
        project: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        assigned_to: tuple[str, ...] = (),
        due_date: datetime | None = None,
    ) -> Task:
        task = Task(
            id=new_id(),
            title=title,
            description=description,
            status=TaskStatus(status),
            project=project,
            assigned_to=tuple(dict.fromkeys(assigned_to)),
            due_date=due_date,
            created_at=utcnow(),
        )
        await self._db.execute(
            """INSERT INTO tasks
               (id, title, description, status, project, assigned_to, due_date, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                task.id,
                task.title,
                task.description,
                task.status.value,
                task.project,
                json.dumps(list(task.assigned_to)),
                _to_text(task.due_date),
                _to_text(task.created_at),
            ),
        )
        return task

    async def get(self, task_id: str) -> Task | None:
        row = await self._db.fetch_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        return _row_to_task(row) if row else None

    async def find(self, task_filter: TaskFilter) -> list[Task]:
        """Return tasks matching every set field of the filter."""
        clauses: list[str] = []
        params: list[Any] = []

        if task_filter.project_id is not None:
            clauses.append("project = ?")
            params.append(task_filter.project_id)
        if task_filter.status is not None:
            clauses.append("status = ?")
            params.append(TaskStatus(task_filter.status).value)
        if task_filter.assigned_to is not None:
            clauses.append("EXISTS (SELECT 1 FROM json_each(tasks.assigned_to) WHERE value = ?)")
            params.append(task_filter.assigned_to)
        if task_filter.search_term is not None:
            term = task_filter.search_term.casefold()
            clauses.append(
                "(instr(casefold(title), ?) > 0"
                " OR instr(casefold(coalesce(description, '')), ?) > 0)"
            )
            params.extend([term, term])

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = await self._db.fetch_all(f"SELECT * FROM tasks{where} ORDER BY rowid", tuple(params))
        return [_row_to_task(row) for row in rows]

    async def update(self, task_id: str, patch: dict[str, Any]) -> Task | None:
        values: dict[str, Any] = {}
        for column in ("title", "description", "status", "due_date"):
            if column not in patch:
                continue
            value = patch[column]
            if column == "status":
                value = TaskStatus(value).value
            elif column == "due_date":
                value = _to_text(value)
            values[column] = value

        if values:
            assignments = ", ".join(f"{column} = ?" for column in values)
            await self._db.execute(
                f"UPDATE tasks SET {assignments} WHERE id = ?",
                (*values.values(), task_id),
            )
        return await self.get(task_id)

    async def delete(self, task_id: str) -> Task | None:
        task = await self.get(task_id)
        if task is None:
            return None
        await self._db.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return task

    async def delete_by_project(self, project_id: str) -> list[Task]:
        tasks = await self.find(TaskFilter(project_id=project_id))
        if tasks:
            await self._db.execute("DELETE FROM tasks WHERE project = ?", (project_id,))
        return tasks

    async def add_assignees(self, task_id: str, user_ids: list[str]) -> Task | None:
        task = await self.get(task_id)
        if task is None:
            return None
        assignees = list(dict.fromkeys([*task.assigned_to, *user_ids]))
        if assignees == list(task.assigned_to):
            return task
        return await self._set_assignees(task_id, assignees)

    async def remove_assignee(self, task_id: str, user_id: str) -> Task | None:
        task = await self.get(task_id)
        if task is None:
            return None
        if user_id not in task.assigned_to:
            return task
        return await self._set_assignees(
            task_id, [assignee for assignee in task.assigned_to if assignee != user_id]
        )

    async def _set_assignees(self, task_id: str, assignees: list[str]) -> Task | None:
        await self._db.execute(
            "UPDATE tasks SET assigned_to = ? WHERE id = ?",
            (json.dumps(assignees), task_id),
        )
        return await self.get(task_id)
