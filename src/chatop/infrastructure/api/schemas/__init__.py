"""Pydantic schemas for API requests and responses."""

from chatop.infrastructure.api.schemas.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from chatop.infrastructure.api.schemas.common_schemas import InfoResponse
from chatop.infrastructure.api.schemas.message_schemas import CreateMessageRequest
from chatop.infrastructure.api.schemas.rental_schemas import (
    RentalListResponse,
    RentalResponse,
)

__all__ = [
    "CreateMessageRequest",
    "InfoResponse",
    "LoginRequest",
    "RegisterRequest",
    "RentalListResponse",
    "RentalResponse",
    "TokenResponse",
    "UserResponse",
]
