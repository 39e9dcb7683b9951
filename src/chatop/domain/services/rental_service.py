"""Rental listing operations.

Any authenticated user may list and read rentals. Updates are restricted to
the rental's owner.
"""

from dataclasses import dataclass
from typing import BinaryIO

from sqlalchemy.ext.asyncio import AsyncSession

from chatop.core.exceptions import RentalNotFoundError
from chatop.core.logging import get_logger
from chatop.domain.services.authorization import require_ownership
from chatop.infrastructure.auth.token_types import AuthenticatedUser
from chatop.infrastructure.persistence.models import RentalModel
from chatop.infrastructure.persistence.repositories import RentalRepository
from chatop.infrastructure.storage.picture_storage import PictureStorage

logger = get_logger(__name__)


@dataclass
class PictureUpload:
    """An uploaded picture as received from the client."""

    content: BinaryIO
    content_type: str | None


@dataclass
class RentalData:
    """Editable fields of a rental."""

    name: str
    surface: float
    price: float
    description: str


class RentalService:
    """Service for creating, reading and updating rentals."""

    def __init__(self, session: AsyncSession, storage: PictureStorage) -> None:
        self.session = session
        self.storage = storage
        self.rentals = RentalRepository(session)

    async def list_rentals(self) -> list[RentalModel]:
        return await self.rentals.list_all()

    async def get_rental(self, rental_id: int) -> RentalModel:
        """Get a rental by ID.

        Raises:
            RentalNotFoundError: If no rental has this ID.
        """
        rental = await self.rentals.get_by_id(rental_id)
        if rental is None:
            raise RentalNotFoundError(rental_id)
        return rental

    async def create_rental(
        self,
        data: RentalData,
        picture: PictureUpload,
        owner: AuthenticatedUser,
    ) -> RentalModel:
        """Create a rental owned by the caller.

        Args:
            data: Rental fields.
            picture: Picture to store; required on creation.
            owner: The authenticated caller.

        Returns:
            RentalModel: The persisted rental.

        Raises:
            InvalidPictureError: If the picture is rejected by storage.
        """
        stored = self.storage.save(picture.content, picture.content_type, data.name)
        rental = RentalModel(
            name=data.name,
            surface=data.surface,
            price=data.price,
            description=data.description,
            picture=stored.url,
            owner_id=owner.id,
        )
        try:
            await self.rentals.create(rental)
            await self.session.commit()
        except Exception:
            self.storage.delete(stored.url)
            raise

        logger.info("Rental created", rental_id=rental.id, owner_id=owner.id)
        return rental

    async def update_rental(
        self,
        rental_id: int,
        data: RentalData,
        picture: PictureUpload | None,
        identity: AuthenticatedUser,
    ) -> RentalModel:
        """Update a rental owned by the caller.

        The ownership check runs before any field or file is touched, so a
        rejected update leaves the rental unchanged.

        Raises:
            RentalNotFoundError: If no rental has this ID.
            UnauthorizedError: If the caller does not own the rental.
            InvalidPictureError: If a new picture is rejected by storage.
        """
        rental = require_ownership(await self.get_rental(rental_id), identity)

        old_picture = new_picture = None
        if picture is not None:
            new_picture = self.storage.save(
                picture.content, picture.content_type, data.name
            ).url
            old_picture, rental.picture = rental.picture, new_picture

        rental.name = data.name
        rental.surface = data.surface
        rental.price = data.price
        rental.description = data.description

        try:
            await self.rentals.update(rental)
            await self.session.commit()
        except Exception:
            if new_picture is not None:
                self.storage.delete(new_picture)
            raise

        if old_picture is not None:
            try:
                self.storage.delete(old_picture)
            except OSError as e:
                logger.warning(
                    "Failed to delete replaced picture",
                    rental_id=rental.id,
                    picture=old_picture,
                    error=str(e),
                )

        logger.info("Rental updated", rental_id=rental.id, owner_id=identity.id)
        return rental
