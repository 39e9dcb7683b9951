"""Unit tests for RentalService picture handling."""

import io
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from conftest import PNG_BYTES
from chatop.domain.services import PictureUpload, RentalData, RentalService
from chatop.infrastructure.auth import AuthenticatedUser
from chatop.infrastructure.persistence.models import UserModel
from chatop.infrastructure.persistence.repositories import UserRepository
from chatop.infrastructure.storage.picture_storage import PictureStorage

FLAT = RentalData(name="Flat", surface=40, price=900, description="Two rooms")


def png() -> PictureUpload:
    return PictureUpload(content=io.BytesIO(PNG_BYTES), content_type="image/png")


@pytest.fixture
def storage(settings) -> PictureStorage:
    return PictureStorage(settings)


@pytest_asyncio.fixture
async def owner(db) -> AuthenticatedUser:
    async with db.session() as session:
        user = await UserRepository(session).create(
            UserModel(
                email="alice@example.com",
                password_hash="not-a-real-hash",
                name="Alice",
                token_version=1,
            )
        )
        await session.commit()
    return AuthenticatedUser(id=user.id, email=user.email, name=user.name, token_version=1)


@pytest_asyncio.fixture
async def rental_id(db, storage, owner) -> int:
    async with db.session() as session:
        rental = await RentalService(session, storage).create_rental(FLAT, png(), owner)
    return rental.id


@pytest.mark.asyncio
async def test_failed_update_removes_new_picture(db, storage, owner, rental_id, upload_dir: Path):
    async with db.session() as session:
        original = (await RentalService(session, storage).get_rental(rental_id)).picture

    async def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    with pytest.raises(OperationalError):
        async with db.session() as session:
            session.commit = failing_commit
            await RentalService(session, storage).update_rental(rental_id, FLAT, png(), owner)

    assert [p.name for p in upload_dir.iterdir()] == [original.rsplit("/", 1)[1]]


@pytest.mark.asyncio
async def test_update_succeeds_when_old_picture_cannot_be_removed(
    db, storage, owner, rental_id, monkeypatch
):
    def failing_delete(url):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(storage, "delete", failing_delete)

    async with db.session() as session:
        rental = await RentalService(session, storage).update_rental(
            rental_id, FLAT, png(), owner
        )

    assert rental.picture.endswith("_flat.png")
    async with db.session() as session:
        stored = await RentalService(session, storage).get_rental(rental_id)
    assert stored.picture == rental.picture
