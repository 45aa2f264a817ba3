"""
Embedding provider factory.

Selects the single active backend from validated settings at startup.

Dependencies: httpx, rag_service.configs
System role: Embedding backend instantiation and selection
"""

import logging

import httpx

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.embeddings.bedrock import BedrockEmbeddingProvider
from rag_service.boundary.embeddings.ollama import OllamaEmbeddingProvider
from rag_service.boundary.embeddings.openrouter import OpenRouterEmbeddingProvider
from rag_service.configs import EmbeddingProviderName, Settings

logger = logging.getLogger(__name__)


def create_embedding_provider(settings: Settings, http_client: httpx.AsyncClient) -> EmbeddingProvider:
    """
    Build the configured embedding backend.

    Args:
        settings: Application settings
        http_client: Shared async HTTP client

    Returns:
        EmbeddingProvider: Backend matching settings.embeddings.provider
    """
    config = settings.embeddings
    timeout = settings.rag.http_timeout_seconds
    logger.info(
        f"{__name__}:create_embedding_provider - provider={config.provider.value}, "
        f"model={config.model}, dimensions={config.dimensions}"
    )

    if config.provider == EmbeddingProviderName.OLLAMA:
        return OllamaEmbeddingProvider(
            http_client,
            model=config.model,
            base_url=settings.ollama.base_url,
            dimensions=config.dimensions,
            timeout=timeout,
        )
    if config.provider == EmbeddingProviderName.OPENROUTER:
        return OpenRouterEmbeddingProvider(
            http_client,
            model=config.model,
            base_url=settings.openrouter.base_url,
            dimensions=config.dimensions,
            timeout=timeout,
        )
    return BedrockEmbeddingProvider(
        http_client,
        model=config.model,
        runtime_url=settings.bedrock.runtime_url,
        dimensions=config.dimensions,
        timeout=timeout,
    )
