"""
Storage Service

Handles upload validation and where uploaded files end up. The content
core only ever sees the returned URL strings.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from fastapi import UploadFile

from app.config import settings
from app.exceptions import FileTooLargeError, FileUploadError, InvalidFileTypeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

# Allowed file types
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": [".jpg", ".jpeg"],
    "image/png": [".png"],
    "image/gif": [".gif"],
    "image/webp": [".webp"],
    "image/avif": [".avif"],
}

ALLOWED_DOCUMENT_TYPES = {
    "application/pdf": [".pdf"],
    "application/msword": [".doc"],
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": [".docx"],
    "application/vnd.ms-excel": [".xls"],
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": [".xlsx"],
    "text/plain": [".txt"],
}


class StorageBackend(ABC):
    @abstractmethod
    async def upload_file(self, data: bytes, path: str, mime_type: str = "application/octet-stream") -> str:
        """Store ``data`` under ``path`` and return its public URL."""

    @abstractmethod
    async def delete_file(self, url: str | None) -> None:
        """Remove a previously stored file; unknown URLs are ignored."""


class LocalDiskStorage(StorageBackend):
    """Files under ``upload_dir``, served at ``url_prefix``."""

    def __init__(self, upload_dir: str | Path | None = None, url_prefix: str | None = None):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.url_prefix = (url_prefix or settings.upload_url_prefix).rstrip("/")

    def _local_path(self, url: str) -> Path | None:
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            return None
        relative = url[len(prefix):]
        path = (self.upload_dir / relative).resolve()
        if self.upload_dir.resolve() not in path.parents:
            return None
        return path

    async def upload_file(self, data: bytes, path: str, mime_type: str = "application/octet-stream") -> str:
        target = self.upload_dir / path.lstrip("/")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as buffer:
                buffer.write(data)
        except OSError as e:
            logger.error("Failed to save upload %s: %s", path, e)
            raise FileUploadError(f"Failed to save file: {e}", filename=path) from e

        url = f"{self.url_prefix}/{path.lstrip('/')}"
        logger.info("Saved upload %s (%s, %d bytes)", url, mime_type, len(data))
        return url

    async def delete_file(self, url: str | None) -> None:
        if not url:
            return
        path = self._local_path(url)
        if path is None:
            logger.warning("Not deleting %s: outside the upload directory", url)
            return
        try:
            path.unlink()
            logger.info("Deleted upload %s", url)
        except FileNotFoundError:
            logger.warning("Upload %s already missing", url)
        except OSError as e:
            logger.warning("Failed to delete upload %s: %s", url, e)


def validate_upload(file: UploadFile, allowed_types: dict[str, list[str]]) -> str:
    """
    Check the MIME type and extension of an upload.

    Returns:
        The validated MIME type.

    Raises:
        FileUploadError: no file name.
        InvalidFileTypeError: MIME type or extension not allowed.
    """
    if not file.filename:
        raise FileUploadError("No file provided")

    mime_type = file.content_type
    if not mime_type or mime_type not in allowed_types:
        raise InvalidFileTypeError(mime_type or "unknown", list(allowed_types))

    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in allowed_types[mime_type]:
        raise InvalidFileTypeError(file_ext or "unknown", list(allowed_types))
    return mime_type


async def read_upload(
    file: UploadFile,
    max_size: int | None = None,
    allowed_types: dict[str, list[str]] | None = None,
) -> tuple[bytes, str]:
    """
    Buffer an upload in memory, enforcing the per-file size cap.

    Returns:
        Tuple of (data, mime_type)

    Raises:
        FileTooLargeError: the file exceeds ``max_size``.
    """
    limit = max_size or settings.max_upload_size
    mime_type = validate_upload(file, allowed_types or ALLOWED_IMAGE_TYPES)

    chunks = []
    size = 0
    while chunk := await file.read(CHUNK_SIZE):
        size += len(chunk)
        if size > limit:
            raise FileTooLargeError(limit, file.filename)
        chunks.append(chunk)
    return b"".join(chunks), mime_type


def get_storage() -> StorageBackend:
    return LocalDiskStorage()
