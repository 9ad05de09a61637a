"""DocumentStoragePort protocol for persisting job documents."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.ports.job_store_port import JobId


class DocumentStoragePort(Protocol):
    """Abstraction over the jobs directory.

    Implementations live in the infrastructure layer and must never hand two
    writers the same file name.
    """

    def save_document(self, job_id: JobId, document_type: DocumentType, data: bytes) -> Path: ...

    def thumbnail_path_for(self, document_path: Path) -> Path: ...

    def save_fallback(self, job_id: JobId, data: bytes) -> Path: ...
