from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Mapping

import pytest
from PIL import Image
from pypdf import PdfWriter

from spooldoc.core.config import Settings, get_settings
from spooldoc.domain.document.errors import DocumentWriteError
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.ports.job_store_port import JobId


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _image_bytes(fmt: str, mode: str, size: tuple[int, int]) -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, "red" if mode != "L" else 128).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes("PNG", "RGBA", (64, 32))


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG", "RGB", (640, 480))


@pytest.fixture
def grayscale_png_bytes() -> bytes:
    return _image_bytes("PNG", "L", (10, 20))


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=100)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def info_pdf_bytes() -> bytes:
    return (
        b"%PDF-1.4\n"
        b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"
        b"2 0 obj << /Type /Pages /Kids [3 0 R 4 0 R] /Count 2 >> endobj\n"
        b"3 0 obj << /Type /Page /Resources << /Font << /F1 5 0 R >> >> >> endobj\n"
        b"4 0 obj << /Type/Page /Parent 2 0 R >> endobj\n"
        b"6 0 obj << /Title (Quarterly Report) /Author (Jane Roe) /Creator (Writer)"
        b" /Producer (spoolgen 1.2) /CreationDate (D:20240101120000) >> endobj\n"
        b"trailer << /Root 1 0 R /Info 6 0 R >>\n"
        b"%%EOF\n"
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(JOBS_DIR=tmp_path / "jobs")


class FakeStorage:  # pragma: no cover
    def __init__(self, base: Path | None = None, fail_document: bool = False, fail_fallback: bool = False) -> None:
        self.documents: dict[str, bytes] = {}
        self.fallbacks: list[tuple[JobId, bytes]] = []
        self.fail_document = fail_document
        self.fail_fallback = fail_fallback
        self.base = base or Path("/virtual/jobs")

    def save_document(self, job_id: JobId, document_type: DocumentType, data: bytes) -> Path:
        if self.fail_document:
            raise DocumentWriteError("disk full")
        path = self.base / f"job_{job_id}_1000.{document_type.extension}"
        self.documents[path.name] = data
        return path

    def thumbnail_path_for(self, document_path: Path) -> Path:
        return document_path.parent / f"thumb_{document_path.name}.png"

    def save_fallback(self, job_id: JobId, data: bytes) -> Path:
        if self.fail_fallback:
            raise OSError("read-only filesystem")
        self.fallbacks.append((job_id, data))
        return self.base / f"job_{job_id}_1000.data"


class RecordingJobStore:  # pragma: no cover
    def __init__(self) -> None:
        self.updates: list[tuple[JobId, dict[str, Any]]] = []

    def update_job_metadata(self, job_id: JobId, facts: Mapping[str, Any]) -> None:
        self.updates.append((job_id, dict(facts)))


class FailingJobStore:  # pragma: no cover
    def update_job_metadata(self, job_id: JobId, facts: Mapping[str, Any]) -> None:
        raise ConnectionError("job store unavailable")


class FakeRenderer:  # pragma: no cover
    def __init__(self, result: Image.Image | None = None, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self._result = result
        self._error = error

    def _produce(self, name: str) -> Image.Image | None:
        self.calls.append(name)
        if self._error is not None:
            raise self._error
        if self._result is None:
            return None
        return self._result.copy()

    def render_first_page_to_pixels(self, data: bytes) -> Image.Image | None:
        return self._produce("pdf")

    def decode_and_scale(self, data: bytes, max_dimension: int) -> Image.Image | None:
        return self._produce("image")

    def render_text_snippet(self, data: bytes, max_chars: int, max_lines: int) -> Image.Image | None:
        return self._produce("text")
