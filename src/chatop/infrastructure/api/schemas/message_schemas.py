"""Pydantic schemas for message endpoints."""

from pydantic import BaseModel, Field, field_validator


class CreateMessageRequest(BaseModel):
    """Request body for sending a message about a rental."""

    message: str = Field(..., min_length=1, max_length=500, description="Message content")
    user_id: int = Field(..., description="ID of the sender; must be the caller")
    rental_id: int = Field(..., description="ID of the rental the message is about")

    @field_validator("message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content is required")
        return v
