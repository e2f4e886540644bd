"""Pytest configuration and shared fixtures"""

import io

import pytest
from fastapi.testclient import TestClient

from lanshare.config import Settings
from lanshare.main import create_app
from lanshare.services.file_storage import FileStorageService


class BytesSource:
    """Minimal stand-in for an UploadFile: just `async read(size)`."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buf.read(size)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings rooted in a per-test directory"""
    return Settings(
        FILE_STORAGE_PATH=str(tmp_path / "uploads"),
        PUBLIC_URL="http://192.168.1.20:3000",
        PRINT_QR=False,
        UPLOAD_CHUNK_SIZE=4096,
    )


@pytest.fixture
def storage(settings) -> FileStorageService:
    service = FileStorageService(settings.FILE_STORAGE_PATH, chunk_size=settings.UPLOAD_CHUNK_SIZE)
    service.ensure_ready()
    return service


@pytest.fixture
def client(settings):
    """Client with the lifespan running (storage directory created)"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
