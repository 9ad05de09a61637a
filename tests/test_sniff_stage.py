from __future__ import annotations

from spooldoc.domain.document.constants import PNG_SIGNATURE
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.pipeline.stages.sniff import classify, looks_like_text


def test_empty_buffer_is_unknown() -> None:
    assert classify(b"") is DocumentType.UNKNOWN


def test_pdf_at_start_and_behind_framing() -> None:
    assert classify(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n") is DocumentType.PDF
    assert classify(b"\x00" * 100 + b"%PDF-1.4\n") is DocumentType.PDF


def test_pdf_window_edge() -> None:
    # Marker starting exactly at the window limit is still found
    assert classify(b"\x00" * 1024 + b"%PDF") is DocumentType.PDF
    assert classify(b"\x00" * 1025 + b"%PDF") is DocumentType.UNKNOWN


def test_pdf_window_is_configurable() -> None:
    assert classify(b"xx%PDF-1.4", pdf_search_window=0) is DocumentType.TEXT
    assert classify(b"xx%PDF-1.4", pdf_search_window=2) is DocumentType.PDF


def test_short_buffers_never_match_pdf() -> None:
    assert classify(b"%PD") is DocumentType.TEXT


def test_jpeg_png_postscript_need_offset_zero() -> None:
    assert classify(b"\xff\xd8\xff\xe0" + b"\x00" * 16) is DocumentType.JPEG
    assert classify(b"\x00\xff\xd8\xff") is DocumentType.UNKNOWN
    assert classify(PNG_SIGNATURE + b"\x00\x00\x00\rIHDR") is DocumentType.PNG
    assert classify(b"%!PS-Adobe-3.0\n") is DocumentType.POSTSCRIPT


def test_truncated_png_signature_is_not_png() -> None:
    assert classify(b"\x89PNG") is DocumentType.UNKNOWN


def test_pdf_outranks_postscript() -> None:
    assert classify(b"%!PS\n%PDF-1.4\n") is DocumentType.PDF


def test_plain_text_with_whitespace_controls() -> None:
    assert classify(b"hello\tworld\r\nsecond line\n") is DocumentType.TEXT


def test_text_ratio_is_strictly_greater_than_threshold() -> None:
    # Tunable heuristic: 0.8 printable ratio by default
    assert classify(b"a" * 801 + b"\x00" * 199) is DocumentType.TEXT
    assert classify(b"a" * 800 + b"\x00" * 200) is DocumentType.UNKNOWN


def test_text_threshold_is_configurable() -> None:
    data = b"a" * 600 + b"\x00" * 400
    assert classify(data) is DocumentType.UNKNOWN
    assert classify(data, text_threshold=0.5) is DocumentType.TEXT


def test_only_leading_sample_is_inspected() -> None:
    assert looks_like_text(b"a" * 1024 + b"\x00" * 5000)
    assert not looks_like_text(b"")


def test_full_sample_ratio_boundary() -> None:
    # Tunable heuristic: 0.8 of a full 1024-byte sample is 819.2 printable bytes
    assert classify(b"a" * 820 + b"\x00" * 204) is DocumentType.TEXT
    assert classify(b"a" * 800 + b"\x00" * 224) is DocumentType.UNKNOWN
    assert classify(b"a" * 819 + b"\x00" * 205) is DocumentType.UNKNOWN


def test_bare_png_signature_is_png() -> None:
    assert classify(PNG_SIGNATURE) is DocumentType.PNG
