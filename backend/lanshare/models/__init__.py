"""Domain types shared by services and routes."""
from lanshare.models.file_record import FileRecord

__all__ = ["FileRecord"]
