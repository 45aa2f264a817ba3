"""
Vector database boundary layer.

Provides the in-memory vector index with snapshot persistence.
- VectorStore: concurrent cosine-similarity index
- cosine_similarity: pure scoring function

Dependencies: numpy, pydantic
System role: Vector store adapter for RAG retrieval
"""

from rag_service.boundary.vdb.similarity import cosine_similarity
from rag_service.boundary.vdb.vector_store import SNAPSHOT_FILE_NAME, VectorStore

__all__ = ["SNAPSHOT_FILE_NAME", "VectorStore", "cosine_similarity"]
