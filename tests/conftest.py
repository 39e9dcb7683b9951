"""Pytest configuration for all tests."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from chatop.core.config import Settings
from chatop.infrastructure.api.app import create_app
from chatop.infrastructure.persistence.database import DatabaseManager

TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"

ALICE = {"email": "alice@example.com", "password": "Passw0rd!", "name": "Alice"}
BOB = {"email": "bob@example.com", "password": "B0bPassword", "name": "Bob"}

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    """Settings for an isolated app backed by an in-memory database."""
    return Settings(
        _env_file=None,
        secret_key=TEST_SECRET_KEY,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        external_url="http://test",
        upload_dir=str(upload_dir),
    )


@pytest_asyncio.fixture
async def db(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """A database manager with all tables created."""
    manager = DatabaseManager(settings)
    await manager.create_tables()
    yield manager
    await manager.drop_tables()
    await manager.disconnect()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application built by the factory, with its tables created.

    ASGITransport does not run the lifespan, so the tables are created here.
    """
    application = create_app(settings)
    await application.state.db.create_tables()
    yield application
    await application.state.db.drop_tables()
    await application.state.db.disconnect()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def register(client: AsyncClient, user: dict) -> str:
    """Register a user through the API and return its token."""
    res = await client.post("/api/auth/register", json=user)
    assert res.status_code == 200, res.text
    return res.json()["token"]


async def login(client: AsyncClient, user: dict) -> str:
    """Log a user in through the API and return its token."""
    res = await client.post(
        "/api/auth/login",
        json={"email": user["email"], "password": user["password"]},
    )
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def alice_token(client: AsyncClient) -> str:
    return await register(client, ALICE)


@pytest_asyncio.fixture
async def bob_token(client: AsyncClient) -> str:
    return await register(client, BOB)
