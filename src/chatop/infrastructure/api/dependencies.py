"""FastAPI dependencies.

Everything a handler needs is resolved from ``request.app.state`` (built by
``create_app``) or ``request.state`` (filled by the authentication
middleware). Nothing is looked up from module-level globals.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chatop.core.exceptions import ChatopError, ErrorKind
from chatop.domain.services import AuthService, MessageService, RentalService, UserService
from chatop.infrastructure.auth import AuthenticatedUser, JWTService
from chatop.infrastructure.storage.picture_storage import PictureStorage


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the current request."""
    async with request.app.state.db.session() as session:
        yield session


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_picture_storage(request: Request) -> PictureStorage:
    return request.app.state.picture_storage


def get_current_user(request: Request) -> AuthenticatedUser:
    """Return the identity attached by the authentication middleware.

    Raises:
        ChatopError: MISSING_AUTH if the route was reached without an identity,
            which only happens for a route listed as public.
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise ChatopError(kind=ErrorKind.MISSING_AUTH)
    return identity


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]


def get_auth_service(
    session: DbSession,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> AuthService:
    return AuthService(session, jwt_service)


def get_user_service(session: DbSession) -> UserService:
    return UserService(session)


def get_rental_service(
    session: DbSession,
    storage: Annotated[PictureStorage, Depends(get_picture_storage)],
) -> RentalService:
    return RentalService(session, storage)


def get_message_service(session: DbSession) -> MessageService:
    return MessageService(session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RentalServiceDep = Annotated[RentalService, Depends(get_rental_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
