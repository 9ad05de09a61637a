from __future__ import annotations

from pathlib import Path
from typing import Optional

from spooldoc.core.logging import get_logger
from spooldoc.domain.document.errors import ThumbnailError
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.ports.renderer_port import PixelBuffer, RendererPort

logger = get_logger(__name__)

DEFAULT_MAX_DIMENSION = 300
DEFAULT_MAX_CHARS = 200
DEFAULT_MAX_LINES = 15


def _render(
    data: bytes,
    document_type: DocumentType,
    renderer: RendererPort,
    max_dimension: int,
    max_chars: int,
    max_lines: int,
) -> Optional[PixelBuffer]:
    match document_type:
        case DocumentType.PDF:
            return renderer.render_first_page_to_pixels(data)
        case DocumentType.JPEG | DocumentType.PNG:
            return renderer.decode_and_scale(data, max_dimension)
        case DocumentType.TEXT:
            return renderer.render_text_snippet(data, max_chars, max_lines)
        case _:
            return None


def _write_png(pixels: PixelBuffer, destination: Path) -> Path:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        pixels.save(destination, format="PNG")
    except (OSError, ValueError) as exc:
        raise ThumbnailError(f"Failed to write thumbnail {destination}: {exc}") from exc
    return destination


def request_thumbnail(
    data: bytes,
    document_type: DocumentType,
    destination: Path,
    renderer: Optional[RendererPort],
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    max_chars: int = DEFAULT_MAX_CHARS,
    max_lines: int = DEFAULT_MAX_LINES,
) -> Optional[Path]:
    """Ask ``renderer`` for a preview and persist it as PNG at ``destination``.

    Returns the written path, or None when there is no renderer, the type is
    not previewable, the renderer produced nothing, or anything failed.
    """
    if renderer is None:
        return None
    try:
        pixels = _render(data, document_type, renderer, max_dimension, max_chars, max_lines)
        if pixels is None:
            logger.debug("thumbnail_skipped", extra={"document_type": document_type.name})
            return None
        try:
            return _write_png(pixels, destination)
        finally:
            pixels.close()
    except Exception as exc:
        logger.warning(
            "thumbnail_failed",
            extra={"document_type": document_type.name, "error": f"{type(exc).__name__}: {exc}"},
        )
        return None
