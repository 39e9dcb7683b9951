"""User profile lookups."""

from sqlalchemy.ext.asyncio import AsyncSession

from chatop.core.exceptions import UserNotFoundError
from chatop.infrastructure.auth.token_types import AuthenticatedUser
from chatop.infrastructure.persistence.models import UserModel
from chatop.infrastructure.persistence.repositories import UserRepository


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)

    async def get_user(self, user_id: int) -> UserModel:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this ID.
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def get_profile(self, identity: AuthenticatedUser) -> UserModel:
        """Get the full record of the authenticated caller."""
        return await self.get_user(identity.id)
