from __future__ import annotations

from spooldoc.core.logging import get_logger
from spooldoc.domain.document.constants import FRAME_SIGNATURES
from spooldoc.domain.document.models import Frame
from spooldoc.domain.document.types import DocumentType

logger = get_logger(__name__)


def extract_frame(data: bytes, document_type: DocumentType) -> Frame:
    """Strip leading transport framing in front of the document signature.

    Only PDF, JPEG and PNG are trimmed, at the first occurrence of their own
    signature. Any other type, or a buffer without the signature, comes back
    unchanged with offset 0.
    """
    signature = FRAME_SIGNATURES.get(document_type)
    if signature is None:
        return Frame(data, 0)

    offset = data.find(signature)
    if offset <= 0:
        return Frame(data, 0)

    logger.debug(
        "frame_trimmed",
        extra={"document_type": document_type.name, "offset": offset, "original_size": len(data)},
    )
    return Frame(data[offset:], offset)
