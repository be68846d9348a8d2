"""Files API routes: list, upload, download, delete."""
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, UploadFile, File as FastAPIFile
from fastapi.responses import FileResponse
from pydantic import ValidationError

from fileshare.config import settings
from fileshare.dependencies import get_file_storage, get_metadata_store
from fileshare.errors import (
    AuthorizationError,
    ClientInputError,
    FileTooLargeError,
    NotFoundError,
    StorageFailure,
    UploadFailedError,
)
from fileshare.schemas.common import MessageResponse
from fileshare.schemas.file import ClaimedIdentity, DeleteRequest, FileRecord
from fileshare.services.file_storage import FileStorageService
from fileshare.services.metadata_store import MetadataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


async def get_claimed_identity(request: Request) -> ClaimedIdentity:
    """Identity claimed by the JSON body of a delete request (`{"userId": ...}`).

    Bodies that are absent or not `application/json` carry no claim, and
    neither does a body without `userId`. Such identities own nothing.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        return ClaimedIdentity()
    raw = await request.body()
    if not raw.strip():
        return ClaimedIdentity()
    try:
        body = DeleteRequest.model_validate_json(raw)
    except ValidationError as e:
        raise ClientInputError("Invalid request: body must be a JSON object") from e
    if "user_id" not in body.model_fields_set:
        return ClaimedIdentity()
    return ClaimedIdentity(id=body.user_id)


@router.get("/files", response_model=list[FileRecord])
async def list_files(store: MetadataStore = Depends(get_metadata_store)):
    """List all file records in upload order."""
    return await store.read()


@router.post("/upload", response_model=FileRecord)
async def upload_file(
    file: Optional[UploadFile] = FastAPIFile(None),
    user: Optional[str] = Form(None),
    store: MetadataStore = Depends(get_metadata_store),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Store an uploaded blob and append its record."""
    if file is None:
        raise ClientInputError("File was not uploaded")
    if file.size is not None and file.size > storage.max_size:
        raise FileTooLargeError(storage.max_size)

    try:
        identity = ClaimedIdentity.from_form(user)
    except ValueError as e:
        logger.error("Upload error: %s", e)
        raise UploadFailedError() from e

    original_name = file.filename or ""
    now = datetime.now()
    timestamp_ms = int(now.timestamp() * 1000)
    blob = await storage.save(file, storage.storage_name(timestamp_ms, original_name))

    record = FileRecord(
        id=str(timestamp_ms),
        name=original_name,
        size=blob.size,
        type=file.content_type,
        upload_date=now.strftime(settings.UPLOAD_DATE_FORMAT),
        author=identity.name,
        author_id=identity.id,
        author_color=identity.color,
        filename=blob.filename,
        path=str(blob.path),
    )

    async with store.lock:
        records = await store.read()
        records.append(record)
        if not await store.write(records):
            # The blob stays on disk without a record.
            raise StorageFailure("Error saving file information")

    logger.info("Uploaded %s (%d bytes) as %s", record.name, record.size, record.id)
    return record


@router.get("/download/{file_id}")
async def download_file(
    file_id: str,
    store: MetadataStore = Depends(get_metadata_store),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Download a file by ID under its original name."""
    record = _find_record(await store.read(), file_id)
    if record is None:
        raise NotFoundError("File not found")
    if not storage.exists(record.filename):
        logger.warning("Record %s has no blob at %s", record.id, storage.blob_path(record.filename))
        raise NotFoundError("File not found on server")

    return FileResponse(
        path=storage.blob_path(record.filename),
        filename=record.name,
        media_type=record.type or "application/octet-stream",
    )


@router.delete("/files/{file_id}", response_model=MessageResponse)
async def delete_file(
    file_id: str,
    identity: ClaimedIdentity = Depends(get_claimed_identity),
    store: MetadataStore = Depends(get_metadata_store),
    storage: FileStorageService = Depends(get_file_storage),
):
    """Delete a file and its record. Only the claimed author may delete."""
    async with store.lock:
        records = await store.read()
        record = _find_record(records, file_id)
        if record is None:
            raise NotFoundError("File not found")
        if not identity.owns(record):
            raise AuthorizationError("Cannot delete another user's file")

        try:
            await storage.delete(record.filename)
        except OSError as e:
            logger.error("Delete error for %s: %s", record.id, e)
            raise StorageFailure("Error deleting file") from e

        records.remove(record)
        if not await store.write(records):
            raise StorageFailure("Error deleting file")

    logger.info("Deleted %s (%s)", record.id, record.name)
    return {"message": "File deleted"}


def _find_record(records: list[FileRecord], file_id: str) -> Optional[FileRecord]:
    """First record with a matching id, or None."""
    return next((r for r in records if r.id == file_id), None)
