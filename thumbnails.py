import logging
import os
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an uploaded thumbnail cannot be persisted."""


class ThumbnailStorage:
    """Stores uploaded thumbnails in a local directory served by the web app."""

    def __init__(self, upload_dir: Optional[str] = None, base_url: Optional[str] = None,
                 max_size: Optional[int] = None, allowed_extensions: Optional[Iterable[str]] = None) -> None:
        self.upload_dir = Path(upload_dir or settings.upload_dir).absolute()
        self.base_url = (base_url if base_url is not None else settings.thumbnail_base_url).rstrip("/")
        self.max_size = max_size if max_size is not None else settings.max_upload_size
        self.allowed_extensions = {
            ext.lower() for ext in (allowed_extensions or settings.allowed_image_extensions)
        }

    def store(self, original_filename: str, data: bytes) -> str:
        """Write the upload under a newly generated key and return the key."""
        if len(data) > self.max_size:
            raise StorageError(
                f"File too large. Maximum size: {self.max_size // 1024 // 1024}MB"
            )

        key = self._generate_key(original_filename)
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            # "xb" refuses to overwrite an existing key
            with open(self.upload_dir / key, "xb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Could not store thumbnail {original_filename!r}: {e}") from e

        logger.info("Stored thumbnail %s (%d bytes)", key, len(data))
        return key

    def resolve_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def path_for(self, key: str) -> Path:
        return self.upload_dir / key

    def _generate_key(self, original_filename: str) -> str:
        name = os.path.basename(original_filename or "")
        stem, ext = os.path.splitext(name)
        ext = ext.lower()
        if ext not in self.allowed_extensions:
            raise StorageError(
                f"Invalid file type. Allowed: {', '.join(sorted(self.allowed_extensions))}"
            )
        stem = re.sub(r"[^A-Za-z0-9_-]", "", stem)[:50] or "thumbnail"
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        return f"{stem}_{timestamp}_{uuid.uuid4().hex[:8]}{ext}"
