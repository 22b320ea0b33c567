"""
Boutique Backend — Product Image Storage
=========================================

What:  Validates uploaded product images and writes them into the public
       image directory served under /images.
How:   Checks extension and size, then writes the bytes with aiofiles under a
       generated name: upload time in epoch milliseconds + original extension
       (e.g. 1718031234567.jpg). The client's filename is never used on disk.
Who:   Called by CatalogService when a product is created with a file.

Naming:
    Names are strictly increasing within the process. If two uploads land in
    the same millisecond the second one takes previous + 1, so concurrent
    uploads on the event loop never overwrite each other.
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles

from boutique.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file as received from the multipart body."""
    filename: str
    content: bytes
    content_type: Optional[str] = None


class ImageStore:
    """
    Owns the image directory.

    Directory Structure:
        public/images/
        ├── 1718031234567.jpg
        └── 1718031299001.png
    """

    def __init__(self, image_dir: str, max_size: int):
        self.image_dir = Path(image_dir).resolve()
        self.max_size = max_size
        self._last_stamp = 0
        self.image_dir.mkdir(parents=True, exist_ok=True)
        logger.info("ImageStore initialized with image_dir=%s", self.image_dir)

    def validate_extension(self, filename: str) -> str:
        """
        Returns the normalized (lowercase, dotted) extension.

        Raises ValidationError if the extension is not an allowed image type.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_size(self, size: int) -> None:
        if size == 0:
            raise ValidationError(message="The uploaded image is empty.", field="image")
        if size > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise ValidationError(
                message=f"Image is too large. Maximum size is {max_mb:.1f}MB.",
                field="image",
                context={"max_size": self.max_size, "actual_size": size},
            )

    def next_name(self, extension: str) -> str:
        stamp = max(int(time.time() * 1000), self._last_stamp + 1)
        self._last_stamp = stamp
        return f"{stamp}{extension}"

    def path_for(self, name: str) -> Path:
        return self.image_dir / name

    async def save(self, upload: ImageUpload) -> str:
        """
        Validate and write an uploaded image.

        Returns:
            The generated file name, to be stored on the Product row.

        Raises:
            ValidationError: unsupported extension, empty or oversized file
            FileStorageError: the write failed
        """
        ext = self.validate_extension(upload.filename)
        self.validate_size(len(upload.content))

        name = self.next_name(ext)
        path = self.path_for(name)
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(upload.content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Image stored: %s (%d bytes)", name, len(upload.content))
        return name

    async def remove(self, name: str) -> None:
        """
        Delete a stored image if present.

        Used to undo a write when the product insert fails. Failure to delete
        is logged, not raised: the caller is already reporting an error.
        """
        path = self.path_for(name)
        try:
            if path.exists():
                os.remove(path)
                logger.info("Removed image: %s", name)
        except OSError as e:
            logger.warning("Failed to remove image %s: %s", name, str(e))
