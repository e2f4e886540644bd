"""FastAPI dependencies for the collaborators owned by the app.

Usage in routes:
    from lanshare.dependencies import get_storage

    @router.get("/files")
    async def list_files(storage: FileStorageService = Depends(get_storage)):
        return await storage.list_files()

`create_app()` puts one instance of each on `app.state`; these only look them up.
"""
from fastapi.requests import HTTPConnection

from lanshare.config import Settings
from lanshare.services.file_storage import FileStorageService
from lanshare.services.notification_hub import NotificationHub


def get_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings


def get_storage(conn: HTTPConnection) -> FileStorageService:
    return conn.app.state.storage


def get_hub(conn: HTTPConnection) -> NotificationHub:
    return conn.app.state.hub
