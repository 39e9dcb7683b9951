"""Rental API routes.

Create and update take multipart form data so the picture can be uploaded
along with the rental fields.
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from chatop.domain.services import PictureUpload, RentalData
from chatop.infrastructure.api.dependencies import CurrentUser, RentalServiceDep
from chatop.infrastructure.api.schemas import (
    InfoResponse,
    RentalListResponse,
    RentalResponse,
)
from chatop.infrastructure.api.schemas.rental_schemas import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX,
    PRICE_MIN,
    SURFACE_MAX,
    SURFACE_MIN,
)

router = APIRouter()

NameField = Annotated[str, Form(min_length=1, max_length=NAME_MAX_LENGTH)]
SurfaceField = Annotated[float, Form(ge=SURFACE_MIN, le=SURFACE_MAX)]
PriceField = Annotated[float, Form(ge=PRICE_MIN, le=PRICE_MAX)]
DescriptionField = Annotated[
    str, Form(min_length=DESCRIPTION_MIN_LENGTH, max_length=DESCRIPTION_MAX_LENGTH)
]


@router.get("", response_model=RentalListResponse)
async def list_rentals(rental_service: RentalServiceDep) -> RentalListResponse:
    """List all rentals."""
    rentals = await rental_service.list_rentals()
    return RentalListResponse(rentals=[RentalResponse.model_validate(r) for r in rentals])


@router.get(
    "/{rental_id}",
    response_model=RentalResponse,
    responses={404: {"description": "Rental not found"}},
)
async def get_rental(rental_id: int, rental_service: RentalServiceDep) -> RentalResponse:
    """Get a rental by ID."""
    rental = await rental_service.get_rental(rental_id)
    return RentalResponse.model_validate(rental)


@router.post(
    "",
    response_model=InfoResponse,
    responses={400: {"description": "Validation error or invalid picture"}},
)
async def create_rental(
    current_user: CurrentUser,
    rental_service: RentalServiceDep,
    name: NameField,
    surface: SurfaceField,
    price: PriceField,
    description: DescriptionField,
    picture: Annotated[UploadFile, File()],
) -> InfoResponse:
    """Create a rental owned by the caller."""
    await rental_service.create_rental(
        RentalData(name=name, surface=surface, price=price, description=description),
        PictureUpload(content=picture.file, content_type=picture.content_type),
        owner=current_user,
    )
    return InfoResponse(message="Rental created !")


@router.put(
    "/{rental_id}",
    response_model=InfoResponse,
    responses={
        400: {"description": "Validation error or invalid picture"},
        403: {"description": "Caller does not own the rental"},
        404: {"description": "Rental not found"},
    },
)
async def update_rental(
    rental_id: int,
    current_user: CurrentUser,
    rental_service: RentalServiceDep,
    name: NameField,
    surface: SurfaceField,
    price: PriceField,
    description: DescriptionField,
    picture: Annotated[UploadFile | None, File()] = None,
) -> InfoResponse:
    """Update a rental. Only its owner may do so."""
    upload = None
    if picture is not None and picture.filename:
        upload = PictureUpload(content=picture.file, content_type=picture.content_type)

    await rental_service.update_rental(
        rental_id,
        RentalData(name=name, surface=surface, price=price, description=description),
        upload,
        identity=current_user,
    )
    return InfoResponse(message="Rental updated !")
