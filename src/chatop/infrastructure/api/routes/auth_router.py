"""Authentication API routes.

Registration and login are exempt from the authentication gate; ``/me``
requires a valid bearer token.
"""

from fastapi import APIRouter

from chatop.infrastructure.api.dependencies import (
    AuthServiceDep,
    CurrentUser,
    UserServiceDep,
)
from chatop.infrastructure.api.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    responses={400: {"description": "Validation error or email already in use"}},
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> TokenResponse:
    """Register a new user and log it in.

    The returned token carries token version 1.
    """
    token = await auth_service.register(request.email, request.password, request.name)
    return TokenResponse(token=token)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> TokenResponse:
    """Authenticate with email and password.

    Every successful login revokes the tokens issued by earlier logins.
    """
    token = await auth_service.login(request.email, request.password)
    return TokenResponse(token=token)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Missing, invalid, expired or revoked token"}},
)
async def get_me(current_user: CurrentUser, user_service: UserServiceDep) -> UserResponse:
    """Get the profile of the authenticated caller."""
    user = await user_service.get_profile(current_user)
    return UserResponse.model_validate(user)
