"""Local filesystem storage for article images.

Storage layout:
    <upload_dir>/images/<stem>_<YYYYMMDD_HHmmss>_<token>.<ext>
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from cms.application.interfaces import ImageStorage

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".gif", ".jpg", ".jpeg", ".png", ".webp"})

_CREATE_ATTEMPTS = 5


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _token() -> str:
    return uuid4().hex[:8]


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class LocalImageStorage(ImageStorage):
    """Infrastructure adapter for article images on the local disk."""

    def __init__(self, upload_dir: str, max_size_bytes: int):
        self._images_dir = Path(upload_dir) / "images"
        self._images_dir.mkdir(parents=True, exist_ok=True)
        self._max_size_bytes = max_size_bytes

    @property
    def images_dir(self) -> Path:
        return self._images_dir

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    async def store_image(self, content: bytes, filename: str) -> str:
        """Store an uploaded image as ``<stem>_<YYYYMMDD_HHmmss>_<token><ext>``.

        The file is created exclusively, so an existing image is never
        overwritten; the stem is reduced to word characters so an uploaded
        name can never escape the images directory.
        """
        suffix = Path(filename).suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise ValueError(f"Unsupported image type: {suffix or 'none'}")
        if not content:
            raise ValueError("Uploaded image is empty")
        if len(content) > self._max_size_bytes:
            raise ValueError(f"Image exceeds {self._max_size_bytes} bytes")

        stem = _sanitise(Path(filename).stem)
        for _ in range(_CREATE_ATTEMPTS):
            stored_name = f"{stem}_{_datetime_stamp()}_{_token()}{suffix}"
            dest_path = self._images_dir / stored_name
            try:
                with open(dest_path, "xb") as fh:
                    fh.write(content)
            except FileExistsError:
                continue
            logger.info("Stored image: %s (%d bytes)", dest_path, len(content))
            return stored_name

        raise FileExistsError(f"Could not find a free name for {filename!r}")

    async def delete_image(self, filename: str) -> bool:
        """Delete a stored image. Returns True if deleted, False if not found."""
        file_path = self._images_dir / Path(filename).name
        if not file_path.exists():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted image from disk: %s", file_path)
        return True
