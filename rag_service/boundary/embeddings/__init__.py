"""
Embedding provider boundary layer.

- OllamaEmbeddingProvider: local inference service
- OpenRouterEmbeddingProvider, BedrockEmbeddingProvider: hosted APIs

Dependencies: httpx
System role: Text-to-vector adapters
"""

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.embeddings.bedrock import BedrockEmbeddingProvider
from rag_service.boundary.embeddings.factory import create_embedding_provider
from rag_service.boundary.embeddings.ollama import OllamaEmbeddingProvider
from rag_service.boundary.embeddings.openrouter import OpenRouterEmbeddingProvider

__all__ = [
    "BedrockEmbeddingProvider",
    "EmbeddingProvider",
    "OllamaEmbeddingProvider",
    "OpenRouterEmbeddingProvider",
    "create_embedding_provider",
]
