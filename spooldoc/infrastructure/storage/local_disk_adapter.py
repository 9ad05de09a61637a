"""Local disk storage adapter implementing DocumentStoragePort.

Layout: every file sits directly in the jobs directory,
  job_<jobId>_<millis>.<ext>        primary document
  thumb_job_<jobId>_<millis>.<ext>.png
  job_<jobId>_<millis>.data         raw fallback
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional

from spooldoc.core.logging import get_logger
from spooldoc.domain.document.constants import (
    DOCUMENT_FILENAME,
    FALLBACK_FILENAME,
    THUMBNAIL_FILENAME,
)
from spooldoc.domain.document.errors import DocumentWriteError
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.ports.job_store_port import JobId

logger = get_logger(__name__)

# Upper bound on millisecond bumps before giving up on a unique name
_MAX_NAME_ATTEMPTS = 1000


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class LocalDiskDocumentStorage:
    """Filesystem adapter conforming to DocumentStoragePort."""

    def __init__(self, base_dir: Path, clock: Optional[Callable[[], int]] = None) -> None:
        self._base_dir = Path(base_dir)
        self._clock = clock or _epoch_millis

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _write_unique(self, template: str, data: bytes, **fields: object) -> Path:
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentWriteError(f"Cannot create jobs directory {self._base_dir}: {exc}") from exc

        millis = self._clock()
        for _ in range(_MAX_NAME_ATTEMPTS):
            dest = self._base_dir / template.format(millis=millis, **fields)
            try:
                # "xb" fails if another writer already owns the name
                f = dest.open("xb")
            except FileExistsError:
                millis += 1
                continue
            except OSError as exc:
                raise DocumentWriteError(f"Failed to create {dest}: {exc}") from exc

            try:
                with f:
                    f.write(data)
            except OSError as exc:
                # The name is ours; never leave a truncated document behind
                dest.unlink(missing_ok=True)
                raise DocumentWriteError(f"Failed to write {dest}: {exc}") from exc
            return dest

        raise DocumentWriteError(f"No free file name in {self._base_dir} after {_MAX_NAME_ATTEMPTS} attempts")

    def save_document(self, job_id: JobId, document_type: DocumentType, data: bytes) -> Path:
        dest = self._write_unique(DOCUMENT_FILENAME, data, job_id=job_id, ext=document_type.extension)
        logger.debug("document_written", extra={"path": str(dest), "processed_size": len(data)})
        return dest

    def thumbnail_path_for(self, document_path: Path) -> Path:
        document_path = Path(document_path)
        return document_path.parent / THUMBNAIL_FILENAME.format(document_name=document_path.name)

    def save_fallback(self, job_id: JobId, data: bytes) -> Path:
        dest = self._write_unique(FALLBACK_FILENAME, data, job_id=job_id)
        logger.debug("fallback_written", extra={"path": str(dest), "original_size": len(data)})
        return dest
