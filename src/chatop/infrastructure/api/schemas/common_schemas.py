"""Schemas shared by several endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

DATE_FORMAT = "%Y/%m/%d"


class TimestampedResponse(BaseModel):
    """Base for responses exposing ``created_at``/``updated_at`` as ``yyyy/MM/dd``."""

    created_at: datetime = Field(..., description="Creation date")
    updated_at: datetime | None = Field(None, description="Last update date, null if never updated")

    model_config = {"from_attributes": True}

    @field_serializer("created_at", "updated_at")
    def format_date(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        return value.strftime(DATE_FORMAT)


class InfoResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Human-readable confirmation")
