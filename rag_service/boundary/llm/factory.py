"""
Generation client factory.

Builds the closed set of generation backends once at startup.

Dependencies: httpx, rag_service.configs
System role: LLM backend instantiation and selection
"""

import httpx

from rag_service.boundary.llm.base import GenerationClient
from rag_service.boundary.llm.bedrock import BedrockClient
from rag_service.boundary.llm.openrouter import OpenRouterClient
from rag_service.configs import Settings


def create_generation_clients(
    settings: Settings,
    http_client: httpx.AsyncClient,
) -> dict[str, GenerationClient]:
    """
    Build every supported generation backend keyed by provider name.

    Args:
        settings: Application settings
        http_client: Shared async HTTP client

    Returns:
        dict[str, GenerationClient]: {'openrouter': ..., 'bedrock': ...}
    """
    timeout = settings.rag.http_timeout_seconds
    clients: list[GenerationClient] = [
        OpenRouterClient(
            http_client,
            default_model=settings.openrouter.model,
            base_url=settings.openrouter.base_url,
            app_url=settings.openrouter.app_url,
            app_title=settings.openrouter.app_title,
            timeout=timeout,
        ),
        BedrockClient(
            http_client,
            default_model=settings.bedrock.model_id,
            runtime_url=settings.bedrock.runtime_url,
            timeout=timeout,
        ),
    ]
    return {client.name: client for client in clients}
