"""Pydantic schemas for authentication and user endpoints."""

from pydantic import BaseModel, EmailStr, Field

from chatop.infrastructure.api.schemas.common_schemas import TimestampedResponse


class RegisterRequest(BaseModel):
    """Request body for registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, max_length=128, description="User's password")
    name: str = Field(..., min_length=3, max_length=20, description="Display name")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenResponse(BaseModel):
    """Response for successful login or registration."""

    token: str = Field(..., description="JWT bearer token, valid for 30 minutes")


class UserResponse(TimestampedResponse):
    """Public profile of a user."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
