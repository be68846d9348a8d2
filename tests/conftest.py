"""Shared fixtures: app wired to throwaway storage under tmp_path."""
import json

import pytest
from fastapi.testclient import TestClient

from fileshare.dependencies import get_file_storage, get_metadata_store
from fileshare.main import app
from fileshare.services.file_storage import FileStorageService
from fileshare.services.metadata_store import JsonMetadataStore

# Small limit so oversized uploads stay cheap to build.
TEST_MAX_UPLOAD_SIZE = 1024


@pytest.fixture
def uploads_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def store(tmp_path):
    """JSON-backed metadata store in a temp directory."""
    return JsonMetadataStore(tmp_path / "files.json")


@pytest.fixture
def storage(uploads_dir):
    return FileStorageService(uploads_dir, max_size=TEST_MAX_UPLOAD_SIZE, chunk_size=256)


@pytest.fixture
def client(store, storage):
    """TestClient whose handlers use the temp store and blob directory.

    Yields:
        fastapi TestClient.
    """
    app.dependency_overrides[get_metadata_store] = lambda: store
    app.dependency_overrides[get_file_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"id": "user-alice", "name": "Alice", "color": "#ff0000"}


@pytest.fixture
def bob():
    return {"id": "user-bob", "name": "Bob", "color": "#0000ff"}


@pytest.fixture
def upload(client):
    """Upload helper returning the raw response."""

    def _upload(user, name="notes.txt", content=b"hello world", mime="text/plain"):
        return client.post(
            "/api/upload",
            files={"file": (name, content, mime)},
            data={"user": json.dumps(user)},
        )

    return _upload
