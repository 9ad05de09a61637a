"""Domain pipeline orchestrator.

Runs one print job through the stages with injected ports:
classify -> extract_frame -> persist -> extract_metadata -> request_thumbnail
-> job-store notification. Every call yields exactly one result record.
"""

from __future__ import annotations

import time
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Mapping, Optional

from spooldoc.core.config import Settings, get_settings
from spooldoc.core.logging import bind_job_id, get_logger
from spooldoc.domain.document.constants import (
    FACT_DOCUMENT_TYPE,
    FACT_HAS_THUMBNAIL,
    FACT_ORIGINAL_SIZE,
    FACT_PAGE_COUNT,
    FACT_PROCESSED_SIZE,
    FACT_PROCESSING_TIME,
)
from spooldoc.domain.document.errors import EmptyDocumentError
from spooldoc.domain.document.models import (
    DocumentMetadata,
    DocumentPreview,
    DocumentProcessingResult,
)
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.pipeline.stages import (
    classify,
    extract_frame,
    extract_metadata,
    request_thumbnail,
)
from spooldoc.domain.ports.job_store_port import JobId, JobStorePort
from spooldoc.domain.ports.renderer_port import RendererPort
from spooldoc.domain.ports.storage_port import DocumentStoragePort

logger = get_logger(__name__)


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _error_message(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__


class DocumentProcessor:
    """Turns raw spooled bytes into a persisted document plus a result record."""

    def __init__(
        self,
        *,
        storage: DocumentStoragePort,
        job_store: Optional[JobStorePort] = None,
        renderer: Optional[RendererPort] = None,
        settings: Optional[Settings] = None,
        notify_executor: Optional[Executor] = None,
    ) -> None:
        self._storage = storage
        self._job_store = job_store
        self._renderer = renderer
        self._settings = settings or get_settings()
        self._notify_executor = notify_executor

    def process(
        self,
        raw: bytes,
        job_id: JobId,
        declared_format: str = "",
        properties: Optional[Mapping[Any, Any]] = None,
    ) -> DocumentProcessingResult:
        """Process one job. Never raises; failures come back as ``success=False``."""
        with bind_job_id(job_id):
            started = time.perf_counter()
            try:
                result = self._run(raw, job_id, declared_format, properties)
            except Exception as exc:
                logger.error(
                    "document_processing_failed",
                    extra={"original_size": len(raw), "error": f"{type(exc).__name__}: {exc}"},
                )
                self._save_fallback(raw, job_id)
                return self._failure(raw, exc)

            logger.info(
                "document_processed",
                extra={
                    "document_type": result.document_type.name,
                    "original_size": result.original_size,
                    "processed_size": result.processed_size,
                    "page_count": result.page_count,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            return result

    def _run(
        self,
        raw: bytes,
        job_id: JobId,
        declared_format: str,
        properties: Optional[Mapping[Any, Any]],
    ) -> DocumentProcessingResult:
        s = self._settings
        if not raw:
            raise EmptyDocumentError("Document data is empty")

        document_type = classify(
            raw,
            pdf_search_window=s.PDF_SEARCH_WINDOW,
            text_threshold=s.TEXT_PRINTABLE_THRESHOLD,
        )
        logger.info("document_classified", extra={"document_type": document_type.name})
        if declared_format:
            declared = DocumentType.from_mime_type(declared_format)
            if declared is not document_type:
                logger.warning(
                    "declared_type_mismatch",
                    extra={"document_type": document_type.name, "declared_type": declared_format},
                )

        frame = extract_frame(raw, document_type)
        document_path = self._storage.save_document(job_id, document_type, frame.data)
        logger.info("document_saved", extra={"path": str(document_path), "processed_size": len(frame.data)})

        metadata = extract_metadata(
            frame.data,
            document_type,
            properties,
            lines_per_page=s.TEXT_LINES_PER_PAGE,
        )

        thumbnail_path: Optional[Path] = None
        if s.THUMBNAILS_ENABLED and self._renderer is not None:
            thumbnail_path = request_thumbnail(
                frame.data,
                document_type,
                self._storage.thumbnail_path_for(document_path),
                self._renderer,
                max_dimension=s.THUMBNAIL_SIZE,
                max_chars=s.TEXT_SNIPPET_MAX_CHARS,
                max_lines=s.TEXT_SNIPPET_MAX_LINES,
            )

        result = DocumentProcessingResult(
            success=True,
            original_size=len(raw),
            processed_size=len(frame.data),
            document_type=document_type,
            page_count=metadata.page_count,
            metadata=metadata,
            document_path=str(document_path),
            thumbnail_path=str(thumbnail_path) if thumbnail_path is not None else None,
        )
        self._notify(job_id, result)
        return result

    def _notify(self, job_id: JobId, result: DocumentProcessingResult) -> None:
        if self._job_store is None:
            return
        facts = {
            FACT_ORIGINAL_SIZE: result.original_size,
            FACT_PROCESSED_SIZE: result.processed_size,
            FACT_DOCUMENT_TYPE: result.document_type.name,
            FACT_PAGE_COUNT: result.page_count,
            FACT_HAS_THUMBNAIL: result.has_thumbnail,
            FACT_PROCESSING_TIME: _now_millis(),
        }
        if self._notify_executor is None:
            try:
                self._job_store.update_job_metadata(job_id, facts)
            except Exception as exc:
                logger.error("job_store_update_failed", extra={"error": f"{type(exc).__name__}: {exc}"})
            return

        try:
            future = self._notify_executor.submit(self._job_store.update_job_metadata, job_id, facts)
        except Exception as exc:
            logger.error("job_store_update_failed", extra={"error": f"{type(exc).__name__}: {exc}"})
            return
        future.add_done_callback(lambda f, jid=job_id: _log_notify_outcome(jid, f))

    def _save_fallback(self, raw: bytes, job_id: JobId) -> None:
        try:
            path = self._storage.save_fallback(job_id, raw)
        except Exception as exc:
            logger.error("fallback_save_failed", extra={"error": f"{type(exc).__name__}: {exc}"})
            return
        logger.info("fallback_saved", extra={"path": str(path), "original_size": len(raw)})

    @staticmethod
    def _failure(raw: bytes, exc: BaseException) -> DocumentProcessingResult:
        return DocumentProcessingResult(
            success=False,
            original_size=len(raw),
            processed_size=0,
            document_type=DocumentType.UNKNOWN,
            page_count=1,
            metadata=DocumentMetadata(document_size=len(raw)),
            error_message=_error_message(exc),
        )

    def preview(self, path: Path | str) -> Optional[DocumentPreview]:
        """Describe a document already on disk, or None when it cannot be read."""
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
            stat = file_path.stat()
        except OSError as exc:
            logger.warning("preview_read_failed", extra={"path": str(file_path), "error": str(exc)})
            return None

        document_type = classify(
            data,
            pdf_search_window=self._settings.PDF_SEARCH_WINDOW,
            text_threshold=self._settings.TEXT_PRINTABLE_THRESHOLD,
        )
        metadata = extract_metadata(data, document_type, lines_per_page=self._settings.TEXT_LINES_PER_PAGE)
        return DocumentPreview(
            file_path=str(file_path),
            document_type=document_type,
            metadata=metadata,
            file_size=stat.st_size,
            last_modified=stat.st_mtime_ns // 1_000_000,
        )


def _log_notify_outcome(job_id: JobId, future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        with bind_job_id(job_id):
            logger.error("job_store_update_failed", extra={"error": f"{type(exc).__name__}: {exc}"})
