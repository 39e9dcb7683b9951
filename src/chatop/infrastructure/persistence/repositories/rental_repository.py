"""Rental repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chatop.infrastructure.persistence.models import RentalModel


class RentalRepository:
    """Repository for rental database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, rental: RentalModel) -> RentalModel:
        """Create a new rental and return it with its generated ID."""
        self.session.add(rental)
        await self.session.flush()
        await self.session.refresh(rental)
        return rental

    async def get_by_id(self, rental_id: int) -> RentalModel | None:
        """Get a rental by ID.

        Args:
            rental_id: Rental ID.

        Returns:
            Rental model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RentalModel).where(RentalModel.id == rental_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[RentalModel]:
        """List every rental, oldest first."""
        result = await self.session.execute(select(RentalModel).order_by(RentalModel.id))
        return list(result.scalars().all())

    async def update(self, rental: RentalModel) -> RentalModel:
        """Flush pending changes on a rental already attached to the session."""
        await self.session.flush()
        await self.session.refresh(rental)
        return rental
