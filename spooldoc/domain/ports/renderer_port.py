"""RendererPort protocol for preview rendering.

The processor never produces pixels itself; it only chooses which operation
to call and persists whatever comes back.
"""

from __future__ import annotations

from typing import Optional, Protocol

from PIL.Image import Image

PixelBuffer = Image


class RendererPort(Protocol):
    """Abstraction over a rendering backend, one operation per type group."""

    def render_first_page_to_pixels(self, data: bytes) -> Optional[PixelBuffer]: ...

    def decode_and_scale(self, data: bytes, max_dimension: int) -> Optional[PixelBuffer]: ...

    def render_text_snippet(self, data: bytes, max_chars: int, max_lines: int) -> Optional[PixelBuffer]: ...
