from __future__ import annotations

from spooldoc.domain.document.constants import (
    JPEG_SIGNATURE,
    PDF_SIGNATURE,
    PNG_SIGNATURE,
    POSTSCRIPT_SIGNATURE,
    TEXT_CONTROL_BYTES,
    TEXT_SAMPLE_SIZE,
)
from spooldoc.domain.document.types import DocumentType

DEFAULT_PDF_SEARCH_WINDOW = 1024
DEFAULT_TEXT_THRESHOLD = 0.8


def _has_pdf_marker(data: bytes, window: int) -> bool:
    if len(data) < len(PDF_SIGNATURE):
        return False
    # Start offsets 0..min(len - 4, window) inclusive
    last_start = min(len(data) - len(PDF_SIGNATURE), window)
    return data.find(PDF_SIGNATURE, 0, last_start + len(PDF_SIGNATURE)) != -1


def looks_like_text(data: bytes, threshold: float = DEFAULT_TEXT_THRESHOLD) -> bool:
    """True when more than ``threshold`` of the leading sample is printable ASCII."""
    sample = data[:TEXT_SAMPLE_SIZE]
    if not sample:
        return False
    printable = sum(1 for b in sample if 32 <= b <= 126 or b in TEXT_CONTROL_BYTES)
    return printable > len(sample) * threshold


def classify(
    data: bytes,
    *,
    pdf_search_window: int = DEFAULT_PDF_SEARCH_WINDOW,
    text_threshold: float = DEFAULT_TEXT_THRESHOLD,
) -> DocumentType:
    """Best-guess document type from content alone.

    PDF is searched inside a leading window because spoolers commonly prepend
    transport bytes to it; every other signature must sit at offset 0.
    Never raises; an empty or unrecognised buffer is UNKNOWN.
    """
    if not data:
        return DocumentType.UNKNOWN
    if _has_pdf_marker(data, pdf_search_window):
        return DocumentType.PDF
    if data.startswith(JPEG_SIGNATURE):
        return DocumentType.JPEG
    if data.startswith(PNG_SIGNATURE):
        return DocumentType.PNG
    if data.startswith(POSTSCRIPT_SIGNATURE):
        return DocumentType.POSTSCRIPT
    if looks_like_text(data, text_threshold):
        return DocumentType.TEXT
    return DocumentType.UNKNOWN
