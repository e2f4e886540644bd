"""FileRecord - metadata of one stored file (the bytes live in the storage directory)."""
import os
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class FileRecord:
    name: str
    size: int
    mtime: datetime

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "FileRecord":
        """Build a record from a fresh stat() of the file."""
        return cls(
            name=name,
            size=st.st_size,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )
