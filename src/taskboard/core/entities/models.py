"""Domain entities: users, projects and tasks.

Entities are immutable snapshots of what the store returned. ``to_dict``
and ``from_dict`` are exact inverses so a cached value decodes to an
entity equal to the one originally loaded.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def new_id() -> str:
    """Generate a new entity identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    """Task workflow states."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class User:
    """A registered user. The password hash is never part of the entity."""

    id: str
    username: str
    email: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            created_at=data["created_at"],
        )


@dataclass(frozen=True)
class Project:
    """A project owned by one user, with an ordered set of members."""

    id: str
    name: str
    owner: str
    description: str | None = None
    members: tuple[str, ...] = ()
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "owner": self.owner,
            "members": list(self.members),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            owner=data["owner"],
            members=tuple(data.get("members") or ()),
            created_at=data.get("created_at"),
        )


@dataclass(frozen=True)
class Task:
    """A task inside a project, assignable to several users."""

    id: str
    title: str
    project: str
    status: TaskStatus = TaskStatus.PENDING
    description: str | None = None
    assigned_to: tuple[str, ...] = ()
    due_date: datetime | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "project": self.project,
            "assigned_to": list(self.assigned_to),
            "due_date": self.due_date,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description"),
            status=TaskStatus(data["status"]),
            project=data["project"],
            assigned_to=tuple(data.get("assigned_to") or ()),
            due_date=data.get("due_date"),
            created_at=data.get("created_at"),
        )
