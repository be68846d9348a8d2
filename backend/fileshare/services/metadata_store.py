"""Metadata store: the ordered list of FileRecords kept in one JSON document.

Every mutation is "read full list, modify, write full list". Handlers hold
``store.lock`` across that cycle so writers inside one process are
serialized. Across processes the last writer wins.
"""
import asyncio
import json
import logging
from pathlib import Path

import aiofiles
from pydantic import TypeAdapter

from fileshare.config import settings
from fileshare.schemas.file import FileRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[FileRecord])


class MetadataStore:
    """Interface for record storage. ``read`` and ``write`` never raise."""

    def __init__(self):
        self.lock = asyncio.Lock()

    async def read(self) -> list[FileRecord]:
        raise NotImplementedError

    async def write(self, records: list[FileRecord]) -> bool:
        raise NotImplementedError


class JsonMetadataStore(MetadataStore):
    """Keeps the record list in a pretty-printed JSON array on disk."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)

    async def read(self) -> list[FileRecord]:
        """Return all records in insertion order.

        A missing, unreadable or malformed document reads as an empty list.
        """
        if not self.path.exists():
            return []
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            return _records_adapter.validate_json(content)
        except (OSError, ValueError) as e:
            logger.error("Error reading files database %s: %s", self.path, e)
            return []

    async def write(self, records: list[FileRecord]) -> bool:
        """Overwrite the document with ``records``. Returns False on failure."""
        try:
            payload = json.dumps(
                [r.model_dump(mode="json", by_alias=True) for r in records],
                indent=2,
                ensure_ascii=False,
            )
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(payload)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error writing files database %s: %s", self.path, e)
            return False


class InMemoryMetadataStore(MetadataStore):
    """Process-local store. Used by tests and throwaway instances."""

    def __init__(self, records: list[FileRecord] | None = None):
        super().__init__()
        self._records = [r.model_copy() for r in records or []]
        self.fail_writes = False

    async def read(self) -> list[FileRecord]:
        return [r.model_copy() for r in self._records]

    async def write(self, records: list[FileRecord]) -> bool:
        if self.fail_writes:
            logger.error("Error writing in-memory files database: writes disabled")
            return False
        self._records = [r.model_copy() for r in records]
        return True


metadata_store = JsonMetadataStore(settings.FILES_DB_PATH)
