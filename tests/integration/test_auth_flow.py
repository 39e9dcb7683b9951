"""End-to-end tests for registration, login and token revocation."""

import re

import jwt
import pytest
from httpx import AsyncClient

from conftest import ALICE, BOB, TEST_SECRET_KEY, bearer, login, register

DATE_PATTERN = re.compile(r"\d{4}/\d{2}/\d{2}")


def token_version(token: str) -> int:
    return jwt.decode(token, TEST_SECRET_KEY, algorithms=["HS256"])["tokenVersion"]


@pytest.mark.asyncio
async def test_login_revokes_earlier_tokens(client: AsyncClient):
    """Register, log in again, and check only the newest token still works."""
    token_a = await register(client, ALICE)
    assert token_version(token_a) == 1

    token_b = await login(client, ALICE)
    assert token_version(token_b) == 2

    res = await client.get("/api/auth/me", headers=bearer(token_a))
    assert res.status_code == 401
    assert res.json()["error"] == "revoked_token"

    res = await client.get("/api/auth/me", headers=bearer(token_b))
    assert res.status_code == 200
    profile = res.json()
    assert profile["email"] == "alice@example.com"
    assert profile["name"] == "Alice"
    assert isinstance(profile["id"], int)


@pytest.mark.asyncio
async def test_each_login_bumps_version(client: AsyncClient):
    await register(client, ALICE)

    versions = [token_version(await login(client, ALICE)) for _ in range(3)]

    assert versions == [2, 3, 4]


@pytest.mark.asyncio
async def test_token_claims(client: AsyncClient):
    token = await register(client, ALICE)
    claims = jwt.decode(token, TEST_SECRET_KEY, algorithms=["HS256"])

    assert claims["sub"] == "alice@example.com"
    assert claims["name"] == "Alice"
    assert claims["exp"] - claims["iat"] == 30 * 60


@pytest.mark.asyncio
async def test_me_profile_format(client: AsyncClient):
    token = await register(client, ALICE)

    res = await client.get("/api/auth/me", headers=bearer(token))

    assert res.status_code == 200
    profile = res.json()
    assert set(profile) == {"id", "name", "email", "created_at", "updated_at"}
    assert DATE_PATTERN.fullmatch(profile["created_at"])
    assert profile["updated_at"] is None


@pytest.mark.asyncio
async def test_profile_updated_at_set_after_login(client: AsyncClient):
    await register(client, ALICE)
    token = await login(client, ALICE)

    res = await client.get("/api/auth/me", headers=bearer(token))

    assert DATE_PATTERN.fullmatch(res.json()["updated_at"])


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client: AsyncClient):
    await register(client, ALICE)

    wrong_password = await client.post(
        "/api/auth/login", json={"email": ALICE["email"], "password": "not-the-password"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": ALICE["password"]}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "error": "invalid_credentials",
        "message": "invalid credentials",
    }
    assert wrong_password.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_login_email_case_insensitive(client: AsyncClient):
    await register(client, ALICE)

    res = await client.post(
        "/api/auth/login", json={"email": "ALICE@Example.COM", "password": ALICE["password"]}
    )

    assert res.status_code == 200


@pytest.mark.asyncio
async def test_register_duplicate_email_differing_in_case(client: AsyncClient):
    await register(client, ALICE)

    res = await client.post(
        "/api/auth/register",
        json={"email": "Alice@EXAMPLE.com", "password": "Another123", "name": "Alice Two"},
    )

    assert res.status_code == 400
    assert res.json() == {
        "error": "email_already_in_use",
        "message": "email address already in use",
    }


@pytest.mark.asyncio
async def test_register_validation_errors(client: AsyncClient):
    res = await client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "short", "name": "Al"},
    )

    assert res.status_code == 400
    assert set(res.json()) == {"email", "password", "name"}


@pytest.mark.asyncio
async def test_register_missing_fields(client: AsyncClient):
    res = await client.post("/api/auth/register", json={"email": BOB["email"]})

    assert res.status_code == 400
    assert set(res.json()) == {"password", "name"}
