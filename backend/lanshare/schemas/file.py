"""File request/response schemas."""
from datetime import datetime
from typing import Literal

from lanshare.schemas.base import CamelModel, CamelORMModel


class FileInfo(CamelORMModel):
    name: str
    size: int
    mtime: datetime


class UploadResponse(CamelModel):
    message: str = "File uploaded successfully"
    file: FileInfo


class ErrorResponse(CamelModel):
    error: str


class FileUploadedEvent(CamelModel):
    """Message pushed over the live channel when an upload completes."""
    event: Literal["file_uploaded"] = "file_uploaded"
    data: FileInfo
