"""Tests for PictureStorage."""

import io
import re
from pathlib import Path

import pytest

from chatop.core.config import Settings
from chatop.core.exceptions import ErrorKind, InvalidPictureError
from chatop.infrastructure.storage.picture_storage import PictureStorage, slugify


@pytest.fixture
def storage(tmp_path: Path) -> PictureStorage:
    settings = Settings(
        _env_file=None,
        secret_key="storage-test-secret-key-32-chars!!",
        external_url="http://files.test/",
        upload_dir=str(tmp_path / "uploads"),
        max_picture_size=1024,
    )
    return PictureStorage(settings)


class TestSlugify:
    def test_basic(self):
        assert slugify("Seaside Apartment") == "seaside-apartment"

    def test_accents_and_punctuation(self):
        assert slugify("Maison à la plage!") == "maison-a-la-plage"

    def test_path_separators_removed(self):
        assert slugify("../../etc/passwd") == "etc-passwd"

    def test_empty_falls_back(self):
        assert slugify("!!!") == "picture"

    def test_truncated(self):
        assert len(slugify("a" * 200)) == 50


class TestSave:
    def test_save_png(self, storage: PictureStorage, tmp_path: Path):
        stored = storage.save(io.BytesIO(b"\x89PNG data"), "image/png", "Seaside Apartment")

        assert re.fullmatch(
            r"[0-9a-f-]{36}_\d{4}-\d{2}-\d{2}_seaside-apartment\.png", stored.filename
        )
        assert stored.url == f"http://files.test/uploads/{stored.filename}"
        assert stored.size == 10
        assert (tmp_path / "uploads" / stored.filename).read_bytes() == b"\x89PNG data"

    def test_save_jpeg_extension(self, storage: PictureStorage):
        stored = storage.save(io.BytesIO(b"jpeg"), "image/jpeg", "Flat")
        assert stored.filename.endswith("_flat.jpg")

    @pytest.mark.parametrize("content_type", ["image/gif", "application/pdf", "text/plain", None])
    def test_rejects_other_types(self, storage: PictureStorage, content_type):
        with pytest.raises(InvalidPictureError) as exc_info:
            storage.save(io.BytesIO(b"data"), content_type, "Flat")
        assert exc_info.value.kind == ErrorKind.INVALID_PICTURE

    def test_rejects_oversized(self, storage: PictureStorage):
        with pytest.raises(InvalidPictureError):
            storage.save(io.BytesIO(b"x" * 1025), "image/png", "Flat")

    def test_rejects_empty(self, storage: PictureStorage):
        with pytest.raises(InvalidPictureError):
            storage.save(io.BytesIO(b""), "image/png", "Flat")

    def test_rejected_picture_writes_nothing(self, storage: PictureStorage, tmp_path: Path):
        with pytest.raises(InvalidPictureError):
            storage.save(io.BytesIO(b"data"), "image/gif", "Flat")
        assert not (tmp_path / "uploads").exists()


class TestDelete:
    def test_delete_removes_file(self, storage: PictureStorage, tmp_path: Path):
        stored = storage.save(io.BytesIO(b"data"), "image/png", "Flat")
        storage.delete(stored.url)
        assert not (tmp_path / "uploads" / stored.filename).exists()

    def test_delete_ignores_foreign_urls(self, storage: PictureStorage, tmp_path: Path):
        outside = tmp_path / "keep.png"
        outside.write_bytes(b"keep")

        storage.delete("http://elsewhere.test/keep.png")
        storage.delete("http://files.test/uploads/../keep.png")

        assert outside.exists()
