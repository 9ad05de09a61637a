from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Mapping, Optional

from spooldoc.core.logging import get_logger
from spooldoc.domain.ports.job_store_port import JobId

_logger = get_logger(__name__)


class InMemoryJobStore:
    """Process-local JobStorePort with optional JSON snapshots per job."""

    def __init__(self, snapshot_dir: Optional[Path] = None) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[str, dict[str, Any]] = {}
        self._snapshot_dir = Path(snapshot_dir) if snapshot_dir is not None else None

    def _write_job_json(self, job_id: JobId, payload: dict[str, Any]) -> None:
        if self._snapshot_dir is None:
            return
        try:
            self._snapshot_dir.mkdir(parents=True, exist_ok=True)
            dest = self._snapshot_dir / f"job_{job_id}.json"
            with dest.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        except Exception as e:
            _logger.error("job_json_write_failed", extra={"error": str(e)})

    def update_job_metadata(self, job_id: JobId, facts: Mapping[str, Any]) -> None:
        with self._lock:
            rec = self._jobs.setdefault(str(job_id), {})
            rec.update(facts)
            snapshot = {"job_id": str(job_id), **rec}
            # Written under the lock so snapshots land in update order
            self._write_job_json(job_id, snapshot)

    def get_job_metadata(self, job_id: JobId) -> dict[str, Any] | None:
        with self._lock:
            rec = self._jobs.get(str(job_id))
            if rec is None:
                return None
            return dict(rec)
