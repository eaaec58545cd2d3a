"""
Object storage for uploaded site assets.

Files live under ``MEDIA_ROOT`` and are served back through the media
router. Provides:
- File type validation (images and PDF documents) with libmagic content sniffing
- Size limits
- Path containment so an object key can never escape the storage root
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

import aiofiles
import magic

logger = logging.getLogger(__name__)

mimetypes.add_type("image/webp", ".webp")

ALLOWED_EXTENSIONS = {
    "image": [".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"],
    "document": [".pdf"],
}

ALLOWED_MIME_TYPES = {
    "image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml",
    "application/pdf",
}

# Sniffed types accepted for an extension-derived type; SVG is XML text
SNIFFED_ALIASES = {
    "image/svg+xml": {"image/svg+xml", "text/xml", "application/xml", "text/plain"},
}


class StorageError(Exception):
    """Raised when an object cannot be stored or located."""


class InvalidUploadError(StorageError):
    """Raised when an uploaded file fails validation."""


@dataclass
class StoredObject:
    path: str
    size: int
    content_type: str
    public_url: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "size": self.size,
            "contentType": self.content_type,
            "publicUrl": self.public_url,
        }


def get_media_category(filename: str) -> Optional[str]:
    """Return 'image' or 'document' for a supported extension, else None."""
    file_ext = Path(filename).suffix.lower()
    for category, extensions in ALLOWED_EXTENSIONS.items():
        if file_ext in extensions:
            return category
    return None


def validate_upload(content: bytes, filename: str, max_size: int) -> str:
    """Validate an upload and return its MIME type.

    Raises:
        InvalidUploadError: empty, too large, unsupported or mismatched file
    """
    if len(content) == 0:
        raise InvalidUploadError("Empty files are not allowed")

    if len(content) > max_size:
        raise InvalidUploadError(
            f"File size ({len(content)} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )

    mime_type, _ = mimetypes.guess_type(filename)
    if not mime_type or get_media_category(filename) is None:
        raise InvalidUploadError("Unable to determine file type")

    if mime_type not in ALLOWED_MIME_TYPES:
        raise InvalidUploadError(f"File type '{mime_type}' is not supported")

    sniffed_mime = magic.from_buffer(content[:4096], mime=True)
    if sniffed_mime not in SNIFFED_ALIASES.get(mime_type, {mime_type}):
        logger.warning(
            "File type mismatch: content is %s, extension says %s",
            sniffed_mime, mime_type,
        )
        raise InvalidUploadError(
            f"File content does not match type '{mime_type}' (mismatch)"
        )

    return mime_type


class ObjectStorage:
    def __init__(self, root: Path, public_base_url: str, max_size: int):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_size = max_size
        self.root.mkdir(parents=True, exist_ok=True)

    def resolve(self, path: str) -> Path:
        """Map an object key to a file path inside the storage root."""
        key = PurePosixPath(path)
        if key.is_absolute() or ".." in key.parts or not key.parts:
            raise StorageError(f"Invalid object path '{path}'")
        target = (self.root / Path(*key.parts)).resolve()
        if self.root.resolve() not in target.parents:
            raise StorageError(f"Invalid object path '{path}'")
        return target

    def make_key(self, folder: str, filename: str) -> str:
        """Build a unique object key under ``folder`` keeping the extension."""
        safe_folder = "/".join(
            part for part in folder.strip("/").split("/")
            if part and part not in {".", ".."}
        ) or "global"
        ext = Path(filename).suffix.lower()
        return f"{safe_folder}/{uuid.uuid4().hex}{ext}"

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/api/v1/media/{path}"

    async def upload(
        self, path: str, content: bytes, content_type: str
    ) -> StoredObject:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(target, "wb") as f:
            await f.write(content)
        logger.info("Stored %s (%d bytes)", path, len(content))
        return StoredObject(
            path=path,
            size=len(content),
            content_type=content_type,
            public_url=self.get_public_url(path),
        )

    async def upload_file(
        self, folder: str, filename: str, content: bytes
    ) -> StoredObject:
        """Validate and store an uploaded file under a generated key."""
        content_type = validate_upload(content, filename, self.max_size)
        return await self.upload(
            self.make_key(folder, filename), content, content_type
        )

    def open(self, path: str) -> Path:
        target = self.resolve(path)
        if not target.is_file():
            raise StorageError(f"Object '{path}' not found")
        return target
