"""Task routes. Every route requires a bearer token."""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from taskboard.api.dependencies import get_current_user_id, get_task_service
from taskboard.api.schemas import AssignRequest, TaskCreate, TaskUpdate, UnassignRequest
from taskboard.core.entities.models import TaskStatus
from taskboard.core.services import TaskService

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await tasks.create_task(
        title=body.title,
        project=body.project,
        description=body.description,
        assigned_to=body.assigned_to,
        due_date=body.due_date,
        status=body.status,
    )
    return {"message": "Task created successfully", "task": task.to_dict()}


@router.get("")
async def list_my_tasks(
    user_id: str = Depends(get_current_user_id),
    tasks: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    return [task.to_dict() for task in await tasks.list_tasks_for_user(user_id)]


@router.get("/all")
async def list_all_tasks(
    tasks: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    return [task.to_dict() for task in await tasks.list_tasks()]


@router.get("/search")
async def search_tasks(
    search_term: str = Query("", alias="searchTerm"),
    tasks: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    return [task.to_dict() for task in await tasks.search_tasks(search_term)]


@router.get("/status/{task_status}")
async def list_tasks_by_status(
    task_status: TaskStatus,
    tasks: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    return [task.to_dict() for task in await tasks.list_tasks_by_status(task_status)]


@router.get("/project/{project_id}")
async def list_project_tasks(
    project_id: str,
    tasks: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    return [task.to_dict() for task in await tasks.list_tasks_for_project(project_id)]


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await tasks.get_task(task_id)
    return task.to_dict()


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    patch = body.model_dump(exclude_unset=True)
    if patch.get("title") is None:
        patch.pop("title", None)
    task = await tasks.update_task(task_id, patch)
    return {"message": "Task updated successfully", "task": task.to_dict()}


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await tasks.delete_task(task_id)
    return {"message": "Task deleted successfully", "task": task.to_dict()}


@router.post("/{task_id}/assign")
async def assign_task(
    task_id: str,
    body: AssignRequest,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await tasks.assign_task(task_id, body.user_ids)
    return {"message": "Task assigned successfully", "task": task.to_dict()}


@router.post("/{task_id}/unassign")
async def unassign_task(
    task_id: str,
    body: UnassignRequest,
    tasks: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    task = await tasks.unassign_task(task_id, body.user_id)
    return {"message": "Task unassigned successfully", "task": task.to_dict()}
