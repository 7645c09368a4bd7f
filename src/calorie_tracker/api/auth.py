"""Account, goals and profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    GoalsPayload,
    LoginRequest,
    MessageResponse,
    ProfilePictureRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from calorie_tracker.domain.errors import InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, request: Request) -> AuthResponse:
    """Create an account and return a bearer token."""
    container: AppContainer = request.app.state.container
    result = container.account_service.register(
        first_name=payload.first_name,
        middle_name=payload.middle_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse.from_result(result)


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> AuthResponse:
    """Exchange credentials for a bearer token."""
    container: AppContainer = request.app.state.container
    result = container.account_service.login(payload.email, payload.password)
    return AuthResponse.from_result(result)


@router.get("/me")
async def me(user_id: CurrentUserId, request: Request) -> UserResponse:
    """Return the authenticated user."""
    container: AppContainer = request.app.state.container
    user = container.account_service.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.from_record(user)


@router.get("/goals")
async def get_goals(user_id: CurrentUserId, request: Request) -> GoalsPayload:
    """Return the user's daily goals."""
    container: AppContainer = request.app.state.container
    goals = container.goals_service.get_goals(user_id)
    if goals is None:
        raise NotFoundError("User not found")
    return GoalsPayload.from_goals(goals)


@router.put("/goals")
async def update_goals(
    payload: GoalsPayload, user_id: CurrentUserId, request: Request
) -> GoalsPayload:
    """Replace the user's daily goals."""
    container: AppContainer = request.app.state.container
    goals = container.goals_service.update_goals(user_id, payload.to_goals())
    if goals is None:
        raise NotFoundError("User not found")
    return GoalsPayload.from_goals(goals)


@router.put("/profile")
async def update_profile(
    payload: UpdateProfileRequest, user_id: CurrentUserId, request: Request
) -> UserResponse:
    """Update the user's name."""
    container: AppContainer = request.app.state.container
    user = container.account_service.update_profile(
        user_id, payload.first_name, payload.middle_name, payload.last_name
    )
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.from_record(user)


@router.put("/change-password")
async def change_password(
    payload: ChangePasswordRequest, user_id: CurrentUserId, request: Request
) -> MessageResponse:
    """Change the password after verifying the current one."""
    container: AppContainer = request.app.state.container
    changed = container.account_service.change_password(
        user_id, payload.current_password, payload.new_password
    )
    if not changed:
        raise InvalidInputError("Current password is incorrect")
    return MessageResponse(message="Password changed successfully")


@router.post("/profile-picture")
async def upload_profile_picture(
    payload: ProfilePictureRequest, user_id: CurrentUserId, request: Request
) -> UserResponse:
    """Store an image data URL as the profile picture."""
    container: AppContainer = request.app.state.container
    user = container.account_service.set_profile_picture(user_id, payload.image_data)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.from_record(user)


@router.delete("/profile-picture")
async def remove_profile_picture(
    user_id: CurrentUserId, request: Request
) -> MessageResponse:
    """Clear the profile picture."""
    container: AppContainer = request.app.state.container
    if not container.account_service.remove_profile_picture(user_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="Profile picture removed successfully")


@router.delete("/account")
async def delete_account(user_id: CurrentUserId, request: Request) -> MessageResponse:
    """Delete the account and all data it owns."""
    container: AppContainer = request.app.state.container
    if not container.account_service.delete_account(user_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="Account deleted successfully")
