"""
Image blob storage under <config_dir>/images.

Uploaded files get a fresh uuid4 name that keeps the original extension.
There is no index: the directory listing is the mapping.
"""
import logging
import uuid
from pathlib import Path
from typing import Union

from .errors import ImageNotFound, StorageError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "png"


def image_extension(filename: str) -> str:
    """Text after the final '.' of the base name, or 'png' when there is none."""
    basename = filename.replace("\\", "/").rpartition("/")[2]
    _, dot, ext = basename.rpartition(".")
    if not dot or not ext:
        return DEFAULT_EXTENSION
    return ext


class ImageStore:
    """Stores and fetches image bytes by generated name."""

    def __init__(self, config_dir: Union[str, Path]):
        self.images_dir = Path(config_dir) / "images"

    def upload(self, data: bytes, filename: str) -> str:
        """Write data under a new random name; return that name."""
        image_name = f"{uuid.uuid4()}.{image_extension(filename)}"
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            (self.images_dir / image_name).write_bytes(data)
        except OSError as e:
            raise StorageError(f"Cannot store image {filename!r}: {e}") from e
        logger.info(f"Stored image {filename!r} as {image_name} ({len(data)} bytes)")
        return image_name

    def fetch(self, image_name: str) -> bytes:
        try:
            return (self.images_dir / image_name).read_bytes()
        except FileNotFoundError as e:
            raise ImageNotFound(f"Image not found: {image_name}") from e
        except OSError as e:
            raise StorageError(f"Cannot read image {image_name}: {e}") from e
