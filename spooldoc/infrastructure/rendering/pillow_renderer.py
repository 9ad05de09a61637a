"""Pillow/pypdf rendering adapter implementing RendererPort.

No rasterizer is involved: a PDF page becomes a canvas with the page's first
embedded image pasted in, or its extracted text drawn when it has none.
"""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image, ImageDraw, ImageFont
from pypdf import PdfReader

from spooldoc.core.logging import get_logger
from spooldoc.domain.document.constants import TEXT_SNIPPET_LINE_CHARS
from spooldoc.domain.ports.renderer_port import PixelBuffer

logger = get_logger(__name__)

_BACKGROUND = "white"
_INK = "black"
_MARGIN = 10
_LINE_STEP = 20


def _to_display_mode(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA"):
        return image
    if "A" in image.getbands() or image.mode == "P":
        return image.convert("RGBA")
    return image.convert("RGB")


class PillowRenderer:
    def __init__(self, thumbnail_size: int = 300) -> None:
        self._size = thumbnail_size

    def decode_and_scale(self, data: bytes, max_dimension: int) -> Optional[PixelBuffer]:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            img.thumbnail((max_dimension, max_dimension))
            return _to_display_mode(img).copy()

    def render_text_snippet(self, data: bytes, max_chars: int, max_lines: int) -> Optional[PixelBuffer]:
        text = data.decode("utf-8", errors="replace")[:max_chars]
        canvas = Image.new("RGB", (self._size, self._size), _BACKGROUND)
        self._draw_lines(canvas, text.splitlines()[:max_lines])
        return canvas

    def render_first_page_to_pixels(self, data: bytes) -> Optional[PixelBuffer]:
        reader = PdfReader(io.BytesIO(data))
        if len(reader.pages) == 0:
            return None
        page = reader.pages[0]

        page_w = float(page.mediabox.width) or 1.0
        page_h = float(page.mediabox.height) or 1.0
        width = self._size
        height = max(1, int(self._size * page_h / page_w))
        canvas = Image.new("RGB", (width, height), _BACKGROUND)

        embedded = self._first_embedded_image(page)
        if embedded is not None:
            with embedded:
                embedded.thumbnail((width, height))
                left = (width - embedded.width) // 2
                top = (height - embedded.height) // 2
                canvas.paste(_to_display_mode(embedded).convert("RGB"), (left, top))
            return canvas

        try:
            text = page.extract_text() or ""
        except Exception as exc:
            logger.debug("pdf_text_extraction_failed", extra={"error": str(exc)})
            text = ""
        self._draw_lines(canvas, text.splitlines())
        return canvas

    @staticmethod
    def _first_embedded_image(page) -> Optional[Image.Image]:
        try:
            for image_file in page.images:
                if image_file.image is not None:
                    return image_file.image
        except Exception as exc:
            # Unsupported filters surface here; fall back to text
            logger.debug("pdf_image_extraction_failed", extra={"error": str(exc)})
        return None

    def _draw_lines(self, canvas: Image.Image, lines: list[str]) -> None:
        draw = ImageDraw.Draw(canvas)
        font = ImageFont.load_default()
        y = _LINE_STEP
        for line in lines:
            if y > canvas.height - _LINE_STEP:
                break
            draw.text((_MARGIN, y), line[:TEXT_SNIPPET_LINE_CHARS], fill=_INK, font=font)
            y += _LINE_STEP
