from __future__ import annotations

from spooldoc.domain.document.constants import PNG_SIGNATURE
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.pipeline.stages.frame import extract_frame


def test_pdf_framing_is_stripped() -> None:
    raw = b"\x01\x02IPP-HEADER" + b"%PDF-1.4\nbody"
    frame = extract_frame(raw, DocumentType.PDF)
    assert frame.offset == 12
    assert frame.data == b"%PDF-1.4\nbody"


def test_clean_document_is_returned_unchanged() -> None:
    raw = b"%PDF-1.4\nbody"
    frame = extract_frame(raw, DocumentType.PDF)
    assert frame.offset == 0
    assert frame.data == raw


def test_image_framing_is_stripped(png_bytes: bytes, jpeg_bytes: bytes) -> None:
    png = extract_frame(b"junk" + png_bytes, DocumentType.PNG)
    assert (png.offset, png.data) == (4, png_bytes)

    jpeg = extract_frame(b"IPP\x01\x02" + jpeg_bytes, DocumentType.JPEG)
    assert (jpeg.offset, jpeg.data) == (5, jpeg_bytes)


def test_other_types_are_never_trimmed() -> None:
    raw = b"see %PDF-1.4 inside"
    for document_type in (DocumentType.TEXT, DocumentType.POSTSCRIPT, DocumentType.RAW, DocumentType.UNKNOWN):
        frame = extract_frame(raw, document_type)
        assert frame.offset == 0
        assert frame.data == raw


def test_missing_signature_returns_input() -> None:
    frame = extract_frame(b"no marker here", DocumentType.PDF)
    assert frame.offset == 0
    assert frame.data == b"no marker here"


def test_output_is_a_suffix_and_reextraction_is_a_noop() -> None:
    raw = b"\x00" * 7 + b"%PDF-1.5 %PDF again"
    first = extract_frame(raw, DocumentType.PDF)
    assert raw.endswith(first.data)
    assert first.offset + len(first.data) == len(raw)

    second = extract_frame(first.data, DocumentType.PDF)
    assert second.offset == 0
    assert second.data == first.data


def test_bare_png_signature_is_kept_whole() -> None:
    frame = extract_frame(PNG_SIGNATURE, DocumentType.PNG)
    assert frame.offset == 0
    assert frame.data == PNG_SIGNATURE
