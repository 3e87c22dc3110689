"""Request models for the HTTP API.

Requests failing these models are rejected with 400 before any service
is called.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskboard.core.entities.models import TaskStatus

EntityId = Annotated[str, Field(pattern=r"^[0-9a-f]{32}$")]


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class ProjectUpdate(BaseModel):
    """Partial update; only fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=3, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class MemberRequest(BaseModel):
    user_id: EntityId = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    project: EntityId
    status: TaskStatus = TaskStatus.PENDING
    assigned_to: list[EntityId] = Field(default_factory=list, alias="assignedTo")
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)


class TaskUpdate(BaseModel):
    """Partial update; only fields sent are changed."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")


class AssignRequest(BaseModel):
    user_ids: list[EntityId] = Field(..., min_length=1, alias="userIds")

    model_config = ConfigDict(populate_by_name=True)


class UnassignRequest(BaseModel):
    user_id: EntityId = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)
