from __future__ import annotations

from concurrent.futures import Executor
from typing import Optional

from spooldoc.core.config import get_settings
from spooldoc.domain.pipeline.orchestrator import DocumentProcessor
from spooldoc.infrastructure.job_store.in_memory import InMemoryJobStore
from spooldoc.infrastructure.rendering.pillow_renderer import PillowRenderer
from spooldoc.infrastructure.storage.local_disk_adapter import LocalDiskDocumentStorage
from spooldoc.services.jobs import JobRunner


def build_storage_adapter() -> LocalDiskDocumentStorage:
    s = get_settings()
    return LocalDiskDocumentStorage(base_dir=s.JOBS_DIR)


def build_renderer() -> Optional[PillowRenderer]:
    s = get_settings()
    if not s.THUMBNAILS_ENABLED:
        return None
    return PillowRenderer(thumbnail_size=s.THUMBNAIL_SIZE)


def build_job_store() -> InMemoryJobStore:
    s = get_settings()
    return InMemoryJobStore(snapshot_dir=s.JOB_SNAPSHOTS_DIR)


def build_processor(
    job_store: Optional[InMemoryJobStore] = None,
    notify_executor: Optional[Executor] = None,
) -> DocumentProcessor:
    return DocumentProcessor(
        storage=build_storage_adapter(),
        job_store=job_store if job_store is not None else build_job_store(),
        renderer=build_renderer(),
        settings=get_settings(),
        notify_executor=notify_executor,
    )


def build_job_runner(processor: Optional[DocumentProcessor] = None) -> JobRunner:
    s = get_settings()
    return JobRunner(processor or build_processor(), max_workers=s.MAX_WORKERS)
