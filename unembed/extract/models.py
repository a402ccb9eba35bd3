"""Pydantic models for the extract pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EmbeddedImageMatch(BaseModel):
    """One `![alt](data:image/<subtype>;base64,<payload>)` occurrence."""

    model_config = ConfigDict(frozen=True)

    full_text: str
    alt_text: str
    subtype: str
    payload: str


class OutputLocation(BaseModel):
    """Where an extracted image is written and how the note links to it."""

    model_config = ConfigDict(frozen=True)

    absolute_path: str  # vault path used for the write
    relative_path: str  # path written into the rewritten link


class MatchError(BaseModel):
    index: int
    message: str
    document: str | None = None


class DocumentError(BaseModel):
    document: str
    error: str


class ConversionReport(BaseModel):
    matched: int = 0
    converted: int = 0
    errors: list[MatchError] = Field(default_factory=list)
    document_errors: list[DocumentError] = Field(default_factory=list)
    documents_total: int = 0
    documents_modified: list[str] = Field(default_factory=list)
    duration: float = 0.0

    def merge(self, other: ConversionReport) -> None:
        """Fold a single-document report into this aggregate."""
        self.matched += other.matched
        self.converted += other.converted
        self.errors.extend(other.errors)
        self.document_errors.extend(other.document_errors)
