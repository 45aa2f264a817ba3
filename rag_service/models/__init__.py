"""Domain models and API schemas."""

from rag_service.models.chat import ChatRequest, ChatResponse, TokenMetrics
from rag_service.models.chunk import Chunk, SimilarityResult
from rag_service.models.document import Document, DocumentMetadata, UploadResponse
from rag_service.models.streaming import StreamEvent, StreamEventType

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Chunk",
    "Document",
    "DocumentMetadata",
    "SimilarityResult",
    "StreamEvent",
    "StreamEventType",
    "TokenMetrics",
    "UploadResponse",
]
