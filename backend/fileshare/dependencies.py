"""FastAPI dependencies for storage access.

Usage in routes:
    from fileshare.dependencies import get_metadata_store

    @router.get("/files")
    async def list_files(store: MetadataStore = Depends(get_metadata_store)):
        return await store.read()

Tests swap the backends with ``app.dependency_overrides``.
"""
from fileshare.services.file_storage import FileStorageService, file_storage
from fileshare.services.metadata_store import MetadataStore, metadata_store


def get_metadata_store() -> MetadataStore:
    return metadata_store


def get_file_storage() -> FileStorageService:
    return file_storage
