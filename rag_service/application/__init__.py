"""
Application layer.

Chunking, embedding and the chat/document orchestrators.
"""

from rag_service.application.chunker import TextChunker
from rag_service.application.embedder import EmbeddingService

__all__ = ["EmbeddingService", "TextChunker"]
