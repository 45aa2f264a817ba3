"""
Document domain models and schemas.

Dependencies: pydantic
System role: Document data structures and upload API contracts
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from rag_service.models.chunk import Chunk


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """Ingested document with its ordered fragments."""

    id: str
    file_name: str
    content: str
    chunks: list[Chunk] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)


class DocumentMetadata(BaseModel):
    """Bookkeeping record for an ingested document."""

    id: str
    file_name: str
    file_size: int = Field(ge=0)
    file_type: str
    chunk_count: int = Field(ge=0)
    uploaded_at: datetime = Field(default_factory=_utcnow)


class UploadResponse(BaseModel):
    """Response schema for document upload."""

    document_id: str
    file_name: str
    chunk_count: int


class DeleteResponse(BaseModel):
    """Response schema for document deletion."""

    success: bool = True
    message: str = "document deleted successfully"
