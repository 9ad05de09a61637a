"""JobStorePort protocol for the external print-job store."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Union

JobId = Union[int, str]


class JobStorePort(Protocol):
    """Abstraction over the job store that owns print-job records.

    Implementations must tolerate concurrent writes keyed by job id.
    """

    def update_job_metadata(self, job_id: JobId, facts: Mapping[str, Any]) -> None: ...
