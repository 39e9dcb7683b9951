"""Local filesystem storage for rental pictures."""

import re
import unicodedata
import uuid
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import BinaryIO

from chatop.core.config import Settings
from chatop.core.exceptions import InvalidPictureError
from chatop.core.logging import get_logger

logger = get_logger(__name__)

PICTURE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}


@dataclass(frozen=True)
class StoredPicture:
    """A picture written to the upload directory.

    Attributes:
        filename: Name of the file inside the upload directory.
        url: Public URL stored on the rental.
        size: Size in bytes.
    """

    filename: str
    url: str
    size: int


def slugify(text: str, max_length: int = 50) -> str:
    """Turn a rental name into a filename-safe slug.

    Examples:
        >>> slugify("Maison à la plage!")
        'maison-a-la-plage'
    """
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "picture"


class PictureStorage:
    """Stores uploaded pictures under the configured upload directory."""

    def __init__(self, settings: Settings) -> None:
        self.upload_dir = Path(settings.upload_dir)
        self.base_url = f"{settings.external_url.rstrip('/')}/{settings.upload_url_path}"
        self.max_size = settings.max_picture_size
        self.allowed_types = [t for t in settings.allowed_picture_types if t in PICTURE_EXTENSIONS]

    def validate(self, content_type: str | None, size: int) -> str:
        """Check a picture's type and size.

        Args:
            content_type: MIME type declared by the client.
            size: Size in bytes.

        Returns:
            The file extension for the picture type.

        Raises:
            InvalidPictureError: If the picture is empty, too large, or not JPEG/PNG.
        """
        if content_type not in self.allowed_types:
            raise InvalidPictureError(
                f"Picture type '{content_type}' is not allowed. "
                f"Allowed types: {', '.join(self.allowed_types)}"
            )
        if size == 0:
            raise InvalidPictureError("Picture is empty")
        if size > self.max_size:
            max_size_mb = self.max_size / (1024 * 1024)
            raise InvalidPictureError(
                f"Picture size exceeds maximum allowed size ({max_size_mb:.2f}MB)"
            )
        return PICTURE_EXTENSIONS[content_type]

    def _generate_filename(self, rental_name: str, extension: str) -> str:
        return f"{uuid.uuid4()}_{date.today().isoformat()}_{slugify(rental_name)}{extension}"

    def save(self, content: BinaryIO, content_type: str | None, rental_name: str) -> StoredPicture:
        """Validate and write a picture.

        Args:
            content: Readable picture data.
            content_type: MIME type declared by the client.
            rental_name: Name of the rental, used in the filename.

        Returns:
            StoredPicture: Where the picture was written and its public URL.
        """
        data = content.read()
        extension = self.validate(content_type, len(data))
        filename = self._generate_filename(rental_name, extension)

        file_path = (self.upload_dir / filename).resolve()
        if file_path.parent != self.upload_dir.resolve():
            raise InvalidPictureError("Invalid picture name")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        with open(file_path, "wb") as f:
            f.write(data)

        logger.info("Picture saved", filename=filename, size=len(data))
        return StoredPicture(filename=filename, url=f"{self.base_url}/{filename}", size=len(data))

    def delete(self, url: str) -> None:
        """Remove a previously stored picture given its public URL.

        URLs that do not point into the upload directory are ignored.
        """
        if not url.startswith(f"{self.base_url}/"):
            return
        filename = url[len(self.base_url) + 1 :]
        file_path = (self.upload_dir / filename).resolve()
        if file_path.parent != self.upload_dir.resolve():
            return
        file_path.unlink(missing_ok=True)
        logger.info("Picture deleted", filename=filename)
