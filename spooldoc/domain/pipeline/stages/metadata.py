"""
Per-type metadata extraction.

Best-effort scans only: PDF is read as Latin-1 text and matched with regular
expressions, images have just their header decoded, text is counted. Nothing
here validates a format. A failing scan never propagates; the caller gets the
base record with ``page_count=1`` plus whatever was gathered before the
failure.
"""

from __future__ import annotations

import io
from typing import Any, Mapping, Optional

from PIL import Image

from spooldoc.core.logging import get_logger
from spooldoc.domain.document.constants import (
    COLOR_SPACE_UNKNOWN,
    LINE_BREAK_RX,
    PDF_ENCRYPT_RX,
    PDF_ENCRYPTION_LEVELS,
    PDF_ENCRYPTION_UNSPECIFIED,
    PDF_IMAGE_MARKERS,
    PDF_INFO_PATTERNS,
    PDF_PAGE_RX,
    PDF_SECURITY_HANDLER_RX,
    PDF_SECURITY_VERSION_RX,
    PDF_SECURITY_WINDOW,
    PDF_TEXT_MARKERS,
    PIXEL_FORMATS,
    PROP_CHARACTER_COUNT,
    PROP_LINE_COUNT,
    PROP_WORD_COUNT,
)
from spooldoc.domain.document.errors import ExtractionError
from spooldoc.domain.document.models import DocumentMetadata
from spooldoc.domain.document.types import DocumentType

logger = get_logger(__name__)

DEFAULT_LINES_PER_PAGE = 50


def _stringify(properties: Optional[Mapping[Any, Any]]) -> dict[str, str]:
    return {str(k): str(v) for k, v in (properties or {}).items()}


def _pdf_encryption_level(content: str) -> Optional[str]:
    if not PDF_ENCRYPT_RX.search(content):
        return None
    handler = PDF_SECURITY_HANDLER_RX.search(content)
    if handler is None:
        return PDF_ENCRYPTION_UNSPECIFIED
    window = content[max(0, handler.start() - PDF_SECURITY_WINDOW) : handler.end() + PDF_SECURITY_WINDOW]
    version = PDF_SECURITY_VERSION_RX.search(window)
    if version is None:
        return PDF_ENCRYPTION_UNSPECIFIED
    return PDF_ENCRYPTION_LEVELS.get(int(version.group(1)), PDF_ENCRYPTION_UNSPECIFIED)


def _extract_pdf(data: bytes, base: DocumentMetadata, found: dict[str, Any]) -> DocumentMetadata:
    content = data.decode("latin-1")

    for field_name, rx in PDF_INFO_PATTERNS.items():
        m = rx.search(content)
        if m:
            found[field_name] = m.group(1)

    found["page_count"] = max(1, sum(1 for _ in PDF_PAGE_RX.finditer(content)))
    found["has_text"] = any(marker in content for marker in PDF_TEXT_MARKERS)
    found["has_images"] = any(marker in content for marker in PDF_IMAGE_MARKERS)

    encryption = _pdf_encryption_level(content)
    if encryption is not None:
        found["encryption_level"] = encryption

    return base.with_updates(**found)


def _extract_image(data: bytes, base: DocumentMetadata, found: dict[str, Any]) -> DocumentMetadata:
    found["has_images"] = True
    found["page_count"] = 1
    try:
        # Image.open only parses the header; pixel data is never decoded here.
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            mode = image.mode
    except (OSError, SyntaxError, ValueError) as exc:
        raise ExtractionError(f"Unreadable image header: {exc}") from exc

    found["resolution"] = f"{width}x{height}"
    found["color_space"] = PIXEL_FORMATS.get(mode, COLOR_SPACE_UNKNOWN)
    return base.with_updates(**found)


def _extract_text(
    data: bytes,
    base: DocumentMetadata,
    found: dict[str, Any],
    lines_per_page: int,
) -> DocumentMetadata:
    found["has_text"] = True
    text = data.decode("utf-8", errors="replace")
    lines = LINE_BREAK_RX.split(text)
    word_count = len(text.split())

    found["page_count"] = max(1, len(lines) // lines_per_page)

    # Caller-supplied keys win over derived counts
    properties = dict(base.custom_properties)
    properties.setdefault(PROP_LINE_COUNT, str(len(lines)))
    properties.setdefault(PROP_WORD_COUNT, str(word_count))
    properties.setdefault(PROP_CHARACTER_COUNT, str(len(text)))
    found["custom_properties"] = properties

    return base.with_updates(**found)


def extract_metadata(
    data: bytes,
    document_type: DocumentType,
    properties: Optional[Mapping[Any, Any]] = None,
    *,
    lines_per_page: int = DEFAULT_LINES_PER_PAGE,
) -> DocumentMetadata:
    """Derive a DocumentMetadata record for ``data`` of the given type.

    ``document_size`` is always ``len(data)`` and ``properties`` (stringified)
    seed ``custom_properties`` before any type-specific additions.
    """
    base = DocumentMetadata(document_size=len(data), custom_properties=_stringify(properties))
    found: dict[str, Any] = {}

    try:
        match document_type:
            case DocumentType.PDF:
                return _extract_pdf(data, base, found)
            case DocumentType.JPEG | DocumentType.PNG:
                return _extract_image(data, base, found)
            case DocumentType.TEXT:
                return _extract_text(data, base, found, lines_per_page)
            case _:
                return base
    except Exception as exc:
        logger.warning(
            "metadata_extraction_failed",
            extra={"document_type": document_type.name, "error": f"{type(exc).__name__}: {exc}"},
        )
        found["page_count"] = 1
        try:
            return base.with_updates(**found)
        except ValueError:
            return base
