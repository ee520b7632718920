"""Disk Blob Store — persists uploaded bytes under the upload directory.

Invariants:
    - Files are created with exclusive mode ("xb"): an existing blob is never overwritten
    - Markers are millisecond timestamps, strictly increasing within the process;
      a name clash on disk (another process) bumps the marker and retries
    - Every OSError is surfaced as StorageError after any partial file is removed
    - Returned reference is "{url_prefix}/{filename}", served back by the /uploads mount

Design Decisions:
    - Blocking file IO runs in asyncio.to_thread: handlers never block the event loop
    - Lives outside the database transaction boundary; uploads are not rolled back with records
"""

import asyncio
import contextlib
import logging
import threading
import time
from pathlib import Path

from folio.core.blob_naming import blob_filename
from folio.core.domain_types import BlobReference
from folio.core.errors import PayloadTooLargeError, StorageError

logger = logging.getLogger(__name__)

_MAX_NAME_ATTEMPTS = 100


class MarkerClock:
    """Millisecond markers that never repeat within one process."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            marker = max(int(self._clock() * 1000), self._last + 1)
            self._last = marker
            return marker


class DiskBlobStore:
    """BlobStore implementation backed by a local directory."""

    def __init__(
        self,
        directory: str | Path,
        url_prefix: str = "/uploads",
        max_bytes: int | None = None,
        markers: MarkerClock | None = None,
    ):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self._markers = markers or MarkerClock()

    def ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create upload directory: {e.strerror}")

    async def store(self, name: str | None, data: bytes) -> BlobReference:
        """Persist data and return its retrievable reference."""
        if self.max_bytes is not None and len(data) > self.max_bytes:
            raise PayloadTooLargeError(len(data), self.max_bytes)
        filename = await asyncio.to_thread(self._write, name, data)
        logger.info(
            "Blob stored", extra={"blob": filename, "size": len(data)},
        )
        return BlobReference(f"{self.url_prefix}/{filename}")

    def _write(self, name: str | None, data: bytes) -> str:
        self.ensure_directory()
        for _ in range(_MAX_NAME_ATTEMPTS):
            filename = blob_filename(name, self._markers.next())
            path = self.directory / filename
            try:
                fh = open(path, "xb")
            except FileExistsError:
                continue
            except OSError as e:
                logger.error(f"Blob create failed for {filename}: {e}")
                raise StorageError(e.strerror or str(e))
            try:
                with fh:
                    fh.write(data)
            except OSError as e:
                with contextlib.suppress(OSError):
                    path.unlink()
                logger.error(f"Blob write failed for {filename}: {e}")
                raise StorageError(e.strerror or str(e))
            return filename
        raise StorageError("could not allocate a unique blob name")
