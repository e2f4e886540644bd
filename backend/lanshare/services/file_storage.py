"""File storage on the local filesystem.

One flat directory holds every uploaded file. The directory listing is the only
index: there is no manifest, and each file is written exactly once under a name
nobody else will pick (`<millis>-<random>-<original name>`). Uploads are staged
in a hidden subdirectory and moved into place atomically, so readers never see
a partial file.
"""
import logging
import os
import random
import stat
import time
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import aiofiles.os
import anyio

from lanshare.errors import InvalidFileName, ListError, NotFound, WriteFailure
from lanshare.models.file_record import FileRecord

logger = logging.getLogger(__name__)

STAGING_DIR = ".incoming"
DEFAULT_CHUNK_SIZE = 1024 * 1024

_realpath = aiofiles.os.wrap(os.path.realpath)


class FileStorageService:
    """Handles file read/write under a single storage root."""

    def __init__(self, base_path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.base_path = Path(base_path)
        self.staging_path = self.base_path / STAGING_DIR
        self.chunk_size = chunk_size

    def ensure_ready(self) -> None:
        """Create the storage root (and staging area). Call once at startup."""
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.staging_path.mkdir(exist_ok=True)
        logger.info("Storing files in %s", self.base_path.resolve())

    @staticmethod
    def generate_unique_name(original_name: str) -> str:
        """Prefix the client's name with a time + random token.

        Never looks at the filesystem; uniqueness comes from the token alone.
        """
        # Some browsers send a full client-side path.
        base = (original_name or "").replace("\\", "/").rsplit("/", 1)[-1]
        base = base.replace("\x00", "").strip() or "unnamed"
        token = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
        return f"{token}-{base}"

    async def save_upload(self, source, original_name: str) -> FileRecord:
        """Stream `source` (anything with `async read(size)`) into a new file.

        Returns the stored record; raises WriteFailure and leaves nothing
        behind if any write fails.
        """
        name = self.generate_unique_name(original_name)
        staged = self.staging_path / name
        size = 0
        try:
            async with aiofiles.open(staged, "wb") as f:
                while chunk := await source.read(self.chunk_size):
                    await f.write(chunk)
                    size += len(chunk)
            await aiofiles.os.replace(staged, self.base_path / name)
        except OSError as e:
            logger.error(f"Failed to store upload {name}: {e}", exc_info=True)
            await self._discard(staged)
            raise WriteFailure() from e
        except BaseException:
            # Cancelled mid-upload: clean up before letting the cancellation through
            with anyio.CancelScope(shield=True):
                await self._discard(staged)
            raise

        logger.info("Stored %s (%d bytes)", name, size)
        return FileRecord(name=name, size=size, mtime=datetime.now(timezone.utc))

    async def list_files(self) -> list[FileRecord]:
        """Every regular file in the root, in directory order, freshly stat'ed."""
        try:
            names = await aiofiles.os.listdir(self.base_path)
        except OSError as e:
            logger.error(f"Failed to read storage directory {self.base_path}: {e}")
            raise ListError() from e

        records = []
        for name in names:
            try:
                st = await aiofiles.os.stat(self.base_path / name)
            except OSError:
                # Vanished (or became unreadable) since listdir
                logger.debug("Skipping unreadable entry %s", name)
                continue
            if stat.S_ISREG(st.st_mode):
                records.append(FileRecord.from_stat(name, st))
        return records

    async def resolve_path(self, name: str) -> Path:
        """Map a stored name to its path, refusing anything outside the root."""
        if not name or name in (".", "..") or any(c in name for c in ("/", "\\", "\x00")):
            raise InvalidFileName()
        root = Path(await _realpath(self.base_path))
        path = Path(await _realpath(root / name))
        if path.parent != root:
            raise InvalidFileName()
        return path

    async def stat_file(self, name: str) -> FileRecord:
        path = await self.resolve_path(name)
        try:
            st = await aiofiles.os.stat(path)
        except OSError as e:
            raise NotFound() from e
        if not stat.S_ISREG(st.st_mode):
            raise NotFound()
        return FileRecord.from_stat(name, st)

    @staticmethod
    async def _discard(path: Path) -> None:
        try:
            await aiofiles.os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial upload {path}: {e}")
