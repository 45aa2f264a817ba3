"""
Core domain logic.

Exceptions, prompt assembly and token estimation shared by the
application and API layers.
"""

from rag_service.core.exceptions import (
    EmbeddingError,
    GenerationError,
    InternalError,
    NotFoundError,
    RAGServiceException,
    StreamingNotSupportedError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "EmbeddingError",
    "GenerationError",
    "InternalError",
    "NotFoundError",
    "RAGServiceException",
    "StreamingNotSupportedError",
    "UnauthorizedError",
    "UpstreamError",
    "ValidationError",
    "VectorStoreError",
]
