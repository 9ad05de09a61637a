"""
Closed set of document types the processor can recognise.

Each member carries its canonical file extension and MIME type. Lookups by
MIME or extension scan members in declaration order and fall back to UNKNOWN,
so ``application/octet-stream`` resolves to RAW.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TypeSpec:
    """Extension and MIME pair for a single document type."""

    extension: str
    mime_type: str


class DocumentType(Enum):
    PDF = TypeSpec("pdf", "application/pdf")
    JPEG = TypeSpec("jpg", "image/jpeg")
    PNG = TypeSpec("png", "image/png")
    POSTSCRIPT = TypeSpec("ps", "application/postscript")
    RAW = TypeSpec("raw", "application/octet-stream")
    TEXT = TypeSpec("txt", "text/plain")
    UNKNOWN = TypeSpec("data", "application/octet-stream")

    @property
    def extension(self) -> str:
        return self.value.extension

    @property
    def mime_type(self) -> str:
        return self.value.mime_type

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "DocumentType":
        wanted = (mime_type or "").split(";", 1)[0].strip().lower()
        for member in cls:
            if member.mime_type == wanted:
                return member
        return cls.UNKNOWN

    @classmethod
    def from_extension(cls, extension: str | None) -> "DocumentType":
        wanted = (extension or "").strip().lstrip(".").lower()
        for member in cls:
            if member.extension == wanted:
                return member
        return cls.UNKNOWN
