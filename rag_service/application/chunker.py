"""
Sliding-window text chunker.

Splits document text into overlapping fixed-size fragments over its
code points. Performs no I/O.

Dependencies: rag_service.models.chunk, rag_service.core.exceptions
System role: First stage of document ingestion
"""

import uuid

from rag_service.core.exceptions import ValidationError
from rag_service.models.chunk import Chunk


class TextChunker:
    """Fixed-size overlapping chunker."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        """
        Initialize chunker with window geometry.

        Args:
            chunk_size: Window length in characters
            chunk_overlap: Characters shared by consecutive windows

        Raises:
            ValidationError: When size is not positive or overlap is not in [0, size)
        """
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be greater than 0", field="chunk_size")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValidationError(
                "chunk_overlap must be between 0 and chunk_size",
                field="chunk_overlap",
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def stride(self) -> int:
        return self.chunk_size - self.chunk_overlap

    def window_offsets(self, length: int) -> list[tuple[int, int]]:
        """
        Compute [start, end) offsets of every window for a text length.

        Args:
            length: Text length in code points

        Returns:
            list[tuple[int, int]]: Window bounds, last one ending at length
        """
        offsets = []
        for start in range(0, length, self.stride):
            end = min(start + self.chunk_size, length)
            offsets.append((start, end))
            if end >= length:
                break
        return offsets

    def chunk(self, doc_id: str, text: str) -> list[Chunk]:
        """
        Split text into trimmed, indexed chunks.

        Args:
            doc_id: Owning document identifier
            text: Document text

        Returns:
            list[Chunk]: Chunks in document order, indices from 0

        Raises:
            ValidationError: When text is empty or whitespace only
        """
        if not text or not text.strip():
            raise ValidationError("document text is empty", field="content")

        chunks = []
        for start, end in self.window_offsets(len(text)):
            content = text[start:end].strip()
            if not content:
                continue
            chunks.append(
                Chunk(
                    id=str(uuid.uuid4()),
                    doc_id=doc_id,
                    content=content,
                    index=len(chunks),
                )
            )
        return chunks
