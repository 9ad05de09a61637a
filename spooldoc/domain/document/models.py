"""Domain models for document processing."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .types import DocumentType


class Frame(NamedTuple):
    """Canonical document bytes and the number of framing bytes stripped."""

    data: bytes
    offset: int


class DocumentMetadata(BaseModel):
    """Descriptive and structural facts about one processed document.

    Instances are frozen; use ``with_updates`` to derive a refined copy.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    creation_date: Optional[str] = None
    modification_date: Optional[str] = None
    keywords: Optional[str] = None
    page_count: int = Field(default=1, ge=1)
    document_size: int = Field(default=0, ge=0)
    color_space: Optional[str] = None
    resolution: Optional[str] = None
    has_images: bool = False
    has_text: bool = False
    encryption_level: Optional[str] = None
    custom_properties: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("custom_properties", mode="after")
    @classmethod
    def _freeze_properties(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("custom_properties")
    def _dump_properties(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    def with_updates(self, **fields: Any) -> "DocumentMetadata":
        """Return a validated copy with ``fields`` overridden."""
        data = self.model_dump()
        data.update(fields)
        return DocumentMetadata.model_validate(data)


class DocumentProcessingResult(BaseModel):
    """Externally visible outcome of a single ``process`` call."""

    model_config = ConfigDict(frozen=True)

    success: bool
    original_size: int = Field(ge=0)
    processed_size: int = Field(ge=0)
    document_type: DocumentType
    page_count: int = Field(default=1, ge=1)
    metadata: DocumentMetadata
    document_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    error_message: Optional[str] = None

    @model_validator(mode="after")
    def _check_failure_shape(self) -> "DocumentProcessingResult":
        if not self.success:
            if self.document_type is not DocumentType.UNKNOWN:
                raise ValueError("failed results must carry DocumentType.UNKNOWN")
            if self.thumbnail_path is not None:
                raise ValueError("failed results cannot reference a thumbnail")
        return self

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail_path is not None


class DocumentPreview(BaseModel):
    """Summary of a document already stored in the jobs directory."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    document_type: DocumentType
    metadata: DocumentMetadata
    file_size: int
    last_modified: int  # epoch millis
