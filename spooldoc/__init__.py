"""Spooled print-job document processing core."""

from spooldoc.domain.document.models import (
    DocumentMetadata,
    DocumentPreview,
    DocumentProcessingResult,
)
from spooldoc.domain.document.types import DocumentType
from spooldoc.domain.pipeline.orchestrator import DocumentProcessor

__version__ = "0.1.0"

__all__ = [
    "DocumentMetadata",
    "DocumentPreview",
    "DocumentProcessingResult",
    "DocumentProcessor",
    "DocumentType",
    "__version__",
]
