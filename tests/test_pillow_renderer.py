from __future__ import annotations

import io

import pytest
from PIL import Image
from pypdf import PdfWriter

from spooldoc.infrastructure.rendering.pillow_renderer import PillowRenderer


def test_decode_and_scale_shrinks_to_fit(jpeg_bytes: bytes) -> None:
    img = PillowRenderer().decode_and_scale(jpeg_bytes, 300)
    assert img is not None
    assert img.size == (300, 225)
    assert img.mode == "RGB"


def test_decode_and_scale_never_upscales(png_bytes: bytes) -> None:
    img = PillowRenderer().decode_and_scale(png_bytes, 300)
    assert img is not None
    assert img.size == (64, 32)
    assert img.mode == "RGBA"


def test_decode_and_scale_rejects_garbage() -> None:
    with pytest.raises(OSError):
        PillowRenderer().decode_and_scale(b"not an image", 300)


def test_text_snippet_draws_on_white_canvas() -> None:
    img = PillowRenderer(thumbnail_size=300).render_text_snippet(b"Invoice 2024\nTotal: 12.00\n", 200, 15)
    assert img is not None
    assert img.size == (300, 300)
    lo, hi = img.convert("L").getextrema()
    assert hi == 255
    assert lo < 255


def test_empty_text_snippet_stays_blank() -> None:
    img = PillowRenderer().render_text_snippet(b"", 200, 15)
    assert img is not None
    assert img.convert("L").getextrema() == (255, 255)


def test_pdf_canvas_follows_first_page_aspect(blank_pdf_bytes: bytes) -> None:
    img = PillowRenderer(thumbnail_size=300).render_first_page_to_pixels(blank_pdf_bytes)
    assert img is not None
    assert img.size == (300, 150)


def test_pdf_without_pages_renders_nothing() -> None:
    buf = io.BytesIO()
    PdfWriter().write(buf)
    assert PillowRenderer().render_first_page_to_pixels(buf.getvalue()) is None


def test_pdf_embedded_image_is_pasted() -> None:
    buf = io.BytesIO()
    Image.new("RGB", (100, 50), (255, 0, 0)).save(buf, format="PDF")

    img = PillowRenderer(thumbnail_size=300).render_first_page_to_pixels(buf.getvalue())

    assert img is not None
    assert img.size == (300, 150)
    r, g, b = img.convert("RGB").getpixel((150, 75))
    assert r > 200 and g < 60 and b < 60
