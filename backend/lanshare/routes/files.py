"""Files API routes."""
from fastapi import APIRouter, Depends, UploadFile, File as FastAPIFile
from fastapi.responses import FileResponse

from lanshare.dependencies import get_hub, get_storage
from lanshare.errors import NoFileProvided
from lanshare.schemas.file import ErrorResponse, FileInfo, UploadResponse
from lanshare.services.file_storage import FileStorageService
from lanshare.services.notification_hub import NotificationHub

router = APIRouter(tags=["files"])


@router.get(
    "/files",
    response_model=list[FileInfo],
    responses={500: {"model": ErrorResponse}},
)
async def list_files(storage: FileStorageService = Depends(get_storage)):
    """List every stored file. No paging, no filtering."""
    records = await storage.list_files()
    return [FileInfo.model_validate(r) for r in records]


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_file(
    file: UploadFile | None = FastAPIFile(None),
    storage: FileStorageService = Depends(get_storage),
    hub: NotificationHub = Depends(get_hub),
):
    """Store one file and tell every live client about it."""
    if file is None or not file.filename:
        raise NoFileProvided()

    record = await storage.save_upload(file, file.filename)
    hub.broadcast(record)

    return UploadResponse(file=FileInfo.model_validate(record))


@router.get("/download/{filename}", responses={404: {"model": ErrorResponse}})
async def download_file(
    filename: str,
    storage: FileStorageService = Depends(get_storage),
):
    """Download a file by its stored name."""
    record = await storage.stat_file(filename)

    return FileResponse(
        path=await storage.resolve_path(record.name),
        filename=record.name,
        media_type="application/octet-stream",
    )
