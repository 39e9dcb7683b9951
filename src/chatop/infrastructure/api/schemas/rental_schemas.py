"""Pydantic schemas for rental endpoints."""

from pydantic import BaseModel, Field

from chatop.infrastructure.api.schemas.common_schemas import TimestampedResponse

NAME_MAX_LENGTH = 100
SURFACE_MIN, SURFACE_MAX = 9, 10000
PRICE_MIN, PRICE_MAX = 0, 10000
DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH = 2, 500


class RentalResponse(TimestampedResponse):
    """A rental listing."""

    id: int = Field(..., description="Rental ID")
    name: str = Field(..., description="Name of the rental")
    surface: float = Field(..., description="Surface in square meters")
    price: float = Field(..., description="Price per night")
    picture: str = Field(..., description="Public URL of the rental's picture")
    description: str = Field(..., description="Description of the rental")
    owner_id: int = Field(..., description="ID of the owning user")


class RentalListResponse(BaseModel):
    rentals: list[RentalResponse] = Field(default_factory=list)
