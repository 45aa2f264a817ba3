"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from rag_service.configs.embeddings import EmbeddingProviderName, EmbeddingSettings
from rag_service.configs.rag import RAGSettings
from rag_service.configs.settings import Settings, get_settings

__all__ = [
    "EmbeddingProviderName",
    "EmbeddingSettings",
    "RAGSettings",
    "Settings",
    "get_settings",
]
