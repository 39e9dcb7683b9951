"""Login and registration flows.

Login verifies credentials, bumps the user's token version, and issues a
token reflecting the new version, so every login revokes all tokens issued
before it. Registration creates the user with token version 1 and logs it in.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chatop.core.exceptions import EmailAlreadyInUseError, InvalidCredentialsError
from chatop.core.logging import get_logger
from chatop.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    JWTService,
    hash_password,
    needs_rehash,
    verify_password,
)
from chatop.infrastructure.persistence.models import UserModel
from chatop.infrastructure.persistence.repositories import UserRepository
from chatop.infrastructure.persistence.repositories.user_repository import normalize_email

logger = get_logger(__name__)


class AuthService:
    """Service orchestrating credential checks and token issuance."""

    def __init__(self, session: AsyncSession, jwt_service: JWTService) -> None:
        self.session = session
        self.jwt_service = jwt_service
        self.users = UserRepository(session)

    async def login(self, email: str, password: str) -> str:
        """Authenticate a user and return a fresh token.

        Unknown emails and wrong passwords fail identically; the password is
        checked against a dummy hash when the user does not exist.

        Args:
            email: Email in any case.
            password: Plaintext password.

        Returns:
            A signed token carrying the incremented token version.

        Raises:
            InvalidCredentialsError: If the email/password pair is wrong.
        """
        user = await self.users.get_by_email(email)

        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: user not found")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidCredentialsError()

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)

        new_version = await self.users.increment_token_version(user)
        await self.session.commit()

        logger.info("User logged in successfully", user_id=user.id, token_version=new_version)
        return self.jwt_service.issue(user)

    async def register(self, email: str, password: str, name: str) -> str:
        """Create a user and return a token for it.

        Args:
            email: Email in any case; stored lowercase.
            password: Plaintext password; only its hash is stored.
            name: Display name.

        Returns:
            A signed token carrying token version 1.

        Raises:
            EmailAlreadyInUseError: If the email is taken, ignoring case.
        """
        email = normalize_email(email)
        if await self.users.email_exists(email):
            logger.info("Registration failed: email already in use")
            raise EmailAlreadyInUseError()

        user = UserModel(
            email=email,
            password_hash=hash_password(password),
            name=name,
            token_version=1,
        )
        try:
            await self.users.create(user)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            await self.session.rollback()
            raise EmailAlreadyInUseError() from e

        logger.info("User registered successfully", user_id=user.id)
        return self.jwt_service.issue(user)
