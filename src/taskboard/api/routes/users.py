"""User registration, login and profile routes."""

from typing import Any

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_current_user_id, get_user_service
from taskboard.api.schemas import LoginRequest, RegisterRequest
from taskboard.core.services import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    users: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user = await users.register(body.username, body.email, body.password)
    return {"message": "User registered successfully", "user": user.to_dict()}


@router.post("/login")
async def login(
    body: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user, token = await users.login(body.email, body.password)
    return {"message": "Login successful", "token": token, "user": user.to_dict()}


@router.get("/profile")
async def profile(
    user_id: str = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user = await users.get_user(user_id)
    return {"message": "Profile retrieved successfully", "user": user.to_dict()}


@router.post("/logout")
async def logout(user_id: str = Depends(get_current_user_id)) -> dict[str, Any]:
    # Tokens are stateless; the client discards its copy
    return {"message": "Logout successful"}


@router.get("")
async def list_users(
    user_id: str = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
) -> list[dict[str, Any]]:
    return [user.to_dict() for user in await users.list_users()]
