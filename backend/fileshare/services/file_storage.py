"""Blob storage: uploaded file contents on the local filesystem."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import aiofiles

from fileshare.config import settings
from fileshare.errors import FileTooLargeError

logger = logging.getLogger(__name__)


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class StoredBlob:
    filename: str
    path: Path
    size: int


class FileStorageService:
    """Handles blob read/write under a single uploads directory."""

    def __init__(self, base_path: str | Path, max_size: int, chunk_size: int = 64 * 1024):
        self.base_path = Path(base_path).resolve()
        self.max_size = max_size
        self.chunk_size = chunk_size

    @staticmethod
    def storage_name(timestamp_ms: int, original_name: str) -> str:
        """Blob name on disk: ``<timestamp>-<original name>``.

        Directory components of the client name are dropped so the blob
        always lands inside the uploads directory.
        """
        return f"{timestamp_ms}-{Path(original_name).name}"

    def blob_path(self, filename: str) -> Path:
        return self.base_path / Path(filename).name

    def exists(self, filename: str) -> bool:
        return self.blob_path(filename).is_file()

    async def save(self, source: AsyncReadable, filename: str) -> StoredBlob:
        """Copy ``source`` to disk in chunks.

        Raises FileTooLargeError once more than ``max_size`` bytes have been
        read; the partial blob is removed before raising.
        """
        self.base_path.mkdir(parents=True, exist_ok=True)
        path = self.blob_path(filename)
        written = 0
        try:
            async with aiofiles.open(path, "wb") as f:
                while chunk := await source.read(self.chunk_size):
                    written += len(chunk)
                    if written > self.max_size:
                        raise FileTooLargeError(self.max_size)
                    await f.write(chunk)
        except FileTooLargeError:
            logger.warning("Rejected upload %s: exceeds %d bytes", filename, self.max_size)
            await self.delete(filename)
            raise
        return StoredBlob(filename=path.name, path=path, size=written)

    async def read(self, filename: str) -> bytes:
        async with aiofiles.open(self.blob_path(filename), "rb") as f:
            return await f.read()

    async def delete(self, filename: str) -> None:
        """Delete a blob. A missing blob is not an error."""
        path = self.blob_path(filename)
        if path.exists():
            os.remove(path)


file_storage = FileStorageService(
    settings.UPLOADS_DIR,
    max_size=settings.MAX_UPLOAD_SIZE,
    chunk_size=settings.UPLOAD_CHUNK_SIZE,
)
