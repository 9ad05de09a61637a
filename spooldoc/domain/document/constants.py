"""
Byte signatures, file naming and metadata vocabularies.

Magic bytes reference:
- PDF:        %PDF (0x25504446), searched inside a leading window
- JPEG:       0xFFD8 at offset 0
- PNG:        0x89504E470D0A1A0A at offset 0
- PostScript: %! at offset 0
"""

from __future__ import annotations

import re
from typing import Final

from .types import DocumentType

PDF_SIGNATURE: Final = b"%PDF"
JPEG_SIGNATURE: Final = b"\xff\xd8"
PNG_SIGNATURE: Final = b"\x89PNG\r\n\x1a\n"
POSTSCRIPT_SIGNATURE: Final = b"%!"

# Types whose leading transport framing is stripped by the frame stage
FRAME_SIGNATURES: Final[dict[DocumentType, bytes]] = {
    DocumentType.PDF: PDF_SIGNATURE,
    DocumentType.JPEG: JPEG_SIGNATURE,
    DocumentType.PNG: PNG_SIGNATURE,
}

# Text heuristic
TEXT_SAMPLE_SIZE: Final = 1024
TEXT_CONTROL_BYTES: Final = frozenset({9, 10, 13})

# Filesystem layout of the jobs directory
DOCUMENT_FILENAME: Final = "job_{job_id}_{millis}.{ext}"
FALLBACK_FILENAME: Final = "job_{job_id}_{millis}.data"
THUMBNAIL_FILENAME: Final = "thumb_{document_name}.png"

# Keys sent to the job store after processing
FACT_ORIGINAL_SIZE: Final = "original_size"
FACT_PROCESSED_SIZE: Final = "processed_size"
FACT_DOCUMENT_TYPE: Final = "document_type"
FACT_PAGE_COUNT: Final = "page_count"
FACT_HAS_THUMBNAIL: Final = "has_thumbnail"
FACT_PROCESSING_TIME: Final = "processing_time"

# ---------------------------------------------------------------------------
# PDF info dictionary scan (Latin-1 view, parenthesised literal strings only)
# ---------------------------------------------------------------------------
PDF_INFO_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    "title": re.compile(r"/Title\s*\(([^)]+)\)"),
    "author": re.compile(r"/Author\s*\(([^)]+)\)"),
    "subject": re.compile(r"/Subject\s*\(([^)]+)\)"),
    "keywords": re.compile(r"/Keywords\s*\(([^)]+)\)"),
    "creator": re.compile(r"/Creator\s*\(([^)]+)\)"),
    "producer": re.compile(r"/Producer\s*\(([^)]+)\)"),
    "creation_date": re.compile(r"/CreationDate\s*\(([^)]+)\)"),
    "modification_date": re.compile(r"/ModDate\s*\(([^)]+)\)"),
}
PDF_PAGE_RX: Final = re.compile(r"/Type\s*/Page\b")
PDF_ENCRYPT_RX: Final = re.compile(r"/Encrypt\b")
PDF_SECURITY_HANDLER_RX: Final = re.compile(r"/Filter\s*/Standard\b")
PDF_SECURITY_VERSION_RX: Final = re.compile(r"/V\s+(\d+)")
PDF_SECURITY_WINDOW: Final = 512
PDF_TEXT_MARKERS: Final = ("/Font", "BT ")
PDF_IMAGE_MARKERS: Final = ("/Image", "/XObject")

# Security handler /V value -> algorithm
PDF_ENCRYPTION_LEVELS: Final[dict[int, str]] = {
    1: "RC4-40",
    2: "RC4-128",
    3: "RC4-128",
    4: "AES-128",
    5: "AES-256",
}
PDF_ENCRYPTION_UNSPECIFIED: Final = "Encrypted"

# ---------------------------------------------------------------------------
# Pillow mode -> pixel format vocabulary
# ---------------------------------------------------------------------------
COLOR_SPACE_RGB565: Final = "RGB565"
COLOR_SPACE_ARGB8888: Final = "ARGB8888"
COLOR_SPACE_ALPHA8: Final = "ALPHA8"
COLOR_SPACE_UNKNOWN: Final = "Unknown"

PIXEL_FORMATS: Final[dict[str, str]] = {
    "BGR;16": COLOR_SPACE_RGB565,
    "RGB": COLOR_SPACE_ARGB8888,
    "RGBA": COLOR_SPACE_ARGB8888,
    "RGBX": COLOR_SPACE_ARGB8888,
    "RGBa": COLOR_SPACE_ARGB8888,
    "CMYK": COLOR_SPACE_ARGB8888,
    "YCbCr": COLOR_SPACE_ARGB8888,
    "P": COLOR_SPACE_ARGB8888,
    "PA": COLOR_SPACE_ARGB8888,
    "LA": COLOR_SPACE_ARGB8888,
    "L": COLOR_SPACE_ALPHA8,
    "1": COLOR_SPACE_ALPHA8,
}

# Text-derived custom properties
PROP_LINE_COUNT: Final = "line_count"
PROP_WORD_COUNT: Final = "word_count"
PROP_CHARACTER_COUNT: Final = "character_count"

# Any break convention; a trailing break opens an empty last line
LINE_BREAK_RX: Final = re.compile(r"\r\n|\r|\n")

# Text thumbnail layout
TEXT_SNIPPET_LINE_CHARS: Final = 30
