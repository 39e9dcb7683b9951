"""Integration tests for the user profile endpoint."""

import pytest
from httpx import AsyncClient

from conftest import bearer


@pytest.mark.asyncio
async def test_get_other_user(client: AsyncClient, alice_token: str, bob_token: str):
    bob = (await client.get("/api/auth/me", headers=bearer(bob_token))).json()

    res = await client.get(f"/api/user/{bob['id']}", headers=bearer(alice_token))

    assert res.status_code == 200
    assert res.json() == bob
    assert "password_hash" not in res.json()
    assert "token_version" not in res.json()


@pytest.mark.asyncio
async def test_get_missing_user(client: AsyncClient, alice_token: str):
    res = await client.get("/api/user/999", headers=bearer(alice_token))

    assert res.status_code == 404
    assert res.json() == {"error": "user_not_found", "message": "user not found"}
