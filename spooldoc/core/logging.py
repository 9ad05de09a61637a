from __future__ import annotations

import contextvars
import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Union

# Context var to carry the job id across the pipeline and worker threads
_job_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("job_id", default="-")

# Extra fields the JSON formatter copies from logger.*(..., extra={...})
_EXTRA_FIELDS = (
    "document_type",
    "declared_type",
    "offset",
    "original_size",
    "processed_size",
    "page_count",
    "path",
    "error",
    "duration_ms",
)


def get_job_id() -> str:
    return _job_id_ctx.get()


@contextmanager
def bind_job_id(job_id: Union[int, str]) -> Iterator[None]:
    """Bind ``job_id`` to every log record emitted inside the block."""
    token = _job_id_ctx.set(str(job_id))
    try:
        yield
    finally:
        _job_id_ctx.reset(token)


class JobIdFilter(logging.Filter):
    """Inject job_id from contextvars into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (shadow builtins)
        record.job_id = get_job_id()
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for log aggregation.

    Outputs the standard fields plus the job id and any whitelisted extra
    context passed via ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "job_id": getattr(record, "job_id", get_job_id()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.thread:
            log_data["thread_id"] = record.thread

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure root logging once at startup. Safe to call repeatedly."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Remove existing handlers to avoid duplicate logs
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level.upper())
    handler.addFilter(JobIdFilter())
    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | job_id=%(job_id)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)

    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("pypdf").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
