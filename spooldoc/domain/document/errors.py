"""Domain-level errors for document processing.

Only ``DocumentWriteError`` and ``EmptyDocumentError`` ever reach the
orchestrator boundary; the others are raised and absorbed inside their stage.
"""

from __future__ import annotations


class ProcessingError(Exception):
    """Base error for document processing failures."""


class EmptyDocumentError(ProcessingError):
    """Raised when a job carries no document bytes at all."""


class DocumentWriteError(ProcessingError):
    """Raised when the primary document cannot be persisted."""


class ExtractionError(ProcessingError):
    """Raised when a type-specific metadata scan cannot read the payload."""


class ThumbnailError(ProcessingError):
    """Raised when a rendered preview cannot be written."""
