"""User repository for database operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chatop.infrastructure.persistence.database import utc_now
from chatop.infrastructure.persistence.models import UserModel


def normalize_email(email: str) -> str:
    """Emails are compared and stored lowercase."""
    return email.strip().lower()


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        The email is normalized before it is persisted.

        Args:
            user: User model to create.

        Returns:
            Created user model with its generated ID.
        """
        user.email = normalize_email(user.email)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email, case-insensitively.

        Args:
            email: User's email address in any case.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered, ignoring case."""
        result = await self.session.execute(
            select(UserModel.id)
            .where(UserModel.email == normalize_email(email))
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def increment_token_version(self, user: UserModel) -> int:
        """Bump the user's token version, revoking every earlier token.

        The increment is a single-row UPDATE evaluated by the database, so
        concurrent logins never lose an increment.

        Args:
            user: The user whose tokens are revoked.

        Returns:
            The new token version.
        """
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(token_version=UserModel.token_version + 1, updated_at=utc_now())
        )
        await self.session.flush()
        await self.session.refresh(user, attribute_names=["token_version", "updated_at"])
        return user.token_version

