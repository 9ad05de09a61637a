from __future__ import annotations

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping, Optional

from spooldoc.core.logging import bind_job_id, get_logger
from spooldoc.domain.document.models import DocumentProcessingResult
from spooldoc.domain.pipeline.orchestrator import DocumentProcessor
from spooldoc.domain.ports.job_store_port import JobId

_logger = get_logger(__name__)


class JobRunner:
    """Runs each print job on its own worker thread.

    The pipeline blocks on disk and decoding, so jobs never run on the
    caller's thread or event loop.
    """

    def __init__(self, processor: DocumentProcessor, max_workers: int = 4) -> None:
        self._processor = processor
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="spooldoc-job")

    def submit(
        self,
        raw: bytes,
        job_id: JobId,
        declared_format: str = "",
        properties: Optional[Mapping[Any, Any]] = None,
    ) -> Future[DocumentProcessingResult]:
        future = self._executor.submit(self._processor.process, raw, job_id, declared_format, properties)
        with bind_job_id(job_id):
            _logger.info("job_submitted", extra={"original_size": len(raw)})
        return future

    async def process_async(
        self,
        raw: bytes,
        job_id: JobId,
        declared_format: str = "",
        properties: Optional[Mapping[Any, Any]] = None,
    ) -> DocumentProcessingResult:
        """Await one job from a coroutine.

        Cancelling the awaiting task does not stop a job that already started;
        it still runs to completion (including any fallback save) on the pool.
        """
        loop = asyncio.get_running_loop()
        task = loop.run_in_executor(
            self._executor,
            self._processor.process,
            raw,
            job_id,
            declared_format,
            properties,
        )
        return await asyncio.shield(task)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "JobRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)
