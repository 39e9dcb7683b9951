"""User API routes."""

from fastapi import APIRouter

from chatop.infrastructure.api.dependencies import UserServiceDep
from chatop.infrastructure.api.schemas import UserResponse

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, user_service: UserServiceDep) -> UserResponse:
    """Get a user's public profile by ID."""
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user)
