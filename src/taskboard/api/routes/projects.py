"""Project routes. Every route requires a bearer token."""

from typing import Any

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_current_user_id, get_project_service
from taskboard.api.schemas import MemberRequest, ProjectCreate, ProjectUpdate
from taskboard.core.services import ProjectService

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    project = await projects.create_project(body.name, owner=user_id, description=body.description)
    return {"message": "Project created successfully", "project": project.to_dict()}


@router.get("/all")
async def list_all_projects(
    projects: ProjectService = Depends(get_project_service),
) -> list[dict[str, Any]]:
    return [project.to_dict() for project in await projects.list_projects()]


@router.get("")
async def list_my_projects(
    user_id: str = Depends(get_current_user_id),
    projects: ProjectService = Depends(get_project_service),
) -> list[dict[str, Any]]:
    return [project.to_dict() for project in await projects.list_projects_for_user(user_id)]


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    project = await projects.get_project(project_id)
    return project.to_dict()


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    patch = body.model_dump(exclude_unset=True)
    if patch.get("name") is None:
        patch.pop("name", None)
    project = await projects.update_project(project_id, patch)
    return {"message": "Project updated successfully", "project": project.to_dict()}


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    project = await projects.delete_project(project_id)
    return {"message": "Project deleted successfully", "project": project.to_dict()}


@router.post("/{project_id}/members")
async def add_member(
    project_id: str,
    body: MemberRequest,
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    project = await projects.add_member(project_id, body.user_id)
    return {"message": "Member added successfully", "project": project.to_dict()}


@router.delete("/{project_id}/members/{user_id}")
async def remove_member(
    project_id: str,
    user_id: str,
    projects: ProjectService = Depends(get_project_service),
) -> dict[str, Any]:
    project = await projects.remove_member(project_id, user_id)
    return {"message": "Member removed successfully", "project": project.to_dict()}
