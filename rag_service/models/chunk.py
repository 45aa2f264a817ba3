"""
Chunk domain model.

Represents a document fragment and, once embedded, its vector.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk model."""

    id: str = Field(description="Opaque chunk identifier")
    doc_id: str = Field(default="", description="Owning document identifier")
    content: str = Field(description="Trimmed chunk text content")
    index: int = Field(default=0, ge=0, description="Ordinal position within the document")
    embedding: list[float] | None = Field(default=None, description="Embedding vector")

    @property
    def is_embedded(self) -> bool:
        """Whether the chunk carries a non-empty embedding."""
        return bool(self.embedding)


class SimilarityResult(BaseModel):
    """Single result from vector search."""

    chunk: Chunk = Field(description="Matched chunk")
    similarity: float = Field(description="Cosine similarity in [-1, 1]")
