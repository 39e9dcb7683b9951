"""Unit tests for AuthService against an in-memory database."""

import pytest

from chatop.core.exceptions import (
    EmailAlreadyInUseError,
    ErrorKind,
    InvalidCredentialsError,
)
from chatop.domain.services import AuthService
from chatop.infrastructure.auth import JWTService
from chatop.infrastructure.persistence.repositories import UserRepository

SECRET = "unit-test-secret-key-with-32-plus-chars"


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(SECRET)


@pytest.mark.asyncio
async def test_register_creates_user_with_version_one(db, jwt_service):
    async with db.session() as session:
        token = await AuthService(session, jwt_service).register(
            "Alice@Example.com", "Passw0rd!", "Alice"
        )

    claims = jwt_service.verify_and_decode(token)
    assert claims.subject == "alice@example.com"
    assert claims.token_version == 1

    async with db.session() as session:
        user = await UserRepository(session).get_by_email("alice@example.com")
    assert user is not None
    assert user.token_version == 1
    assert user.password_hash != "Passw0rd!"
    assert user.updated_at is None


@pytest.mark.asyncio
async def test_register_duplicate_email_ignores_case(db, jwt_service):
    async with db.session() as session:
        await AuthService(session, jwt_service).register("alice@example.com", "Passw0rd!", "Alice")

    async with db.session() as session:
        with pytest.raises(EmailAlreadyInUseError) as exc_info:
            await AuthService(session, jwt_service).register("ALICE@example.com", "Other123!", "Alice2")

    assert exc_info.value.kind == ErrorKind.EMAIL_ALREADY_IN_USE


@pytest.mark.asyncio
async def test_login_increments_token_version(db, jwt_service):
    async with db.session() as session:
        await AuthService(session, jwt_service).register("alice@example.com", "Passw0rd!", "Alice")

    for expected_version in (2, 3):
        async with db.session() as session:
            token = await AuthService(session, jwt_service).login("alice@example.com", "Passw0rd!")
        assert jwt_service.verify_and_decode(token).token_version == expected_version

    async with db.session() as session:
        user = await UserRepository(session).get_by_email("alice@example.com")
    assert user.token_version == 3
    assert user.updated_at is not None


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(db, jwt_service):
    async with db.session() as session:
        await AuthService(session, jwt_service).register("alice@example.com", "Passw0rd!", "Alice")

    async with db.session() as session:
        token = await AuthService(session, jwt_service).login("ALICE@EXAMPLE.COM", "Passw0rd!")

    assert jwt_service.verify_and_decode(token).subject == "alice@example.com"


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(db, jwt_service):
    async with db.session() as session:
        await AuthService(session, jwt_service).register("alice@example.com", "Passw0rd!", "Alice")

    async with db.session() as session:
        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await AuthService(session, jwt_service).login("alice@example.com", "wrong-password")

    async with db.session() as session:
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await AuthService(session, jwt_service).login("nobody@example.com", "Passw0rd!")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.kind == unknown_email.value.kind == ErrorKind.INVALID_CREDENTIALS


@pytest.mark.asyncio
async def test_failed_login_does_not_bump_version(db, jwt_service):
    async with db.session() as session:
        await AuthService(session, jwt_service).register("alice@example.com", "Passw0rd!", "Alice")

    async with db.session() as session:
        with pytest.raises(InvalidCredentialsError):
            await AuthService(session, jwt_service).login("alice@example.com", "wrong-password")

    async with db.session() as session:
        user = await UserRepository(session).get_by_email("alice@example.com")
    assert user.token_version == 1
