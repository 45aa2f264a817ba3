"""
OpenRouter embedding backend.

Uses the OpenAI-compatible embeddings endpoint with bearer auth.

Dependencies: httpx
System role: Hosted embedding adapter
"""

from typing import Any

import httpx

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.http_utils import bearer_headers, post_json
from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError


class OpenRouterEmbeddingProvider(EmbeddingProvider):
    """Embeddings from OpenRouter's /embeddings endpoint."""

    name = EmbeddingProviderName.OPENROUTER

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        dimensions: int | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(http_client, model, dimensions, timeout)
        self._url = f"{base_url.rstrip('/')}/embeddings"

    async def _request_embedding(self, text: str, api_key: str | None) -> Any:
        body = await post_json(
            self._client,
            self._url,
            {"model": self.model, "input": text},
            bearer_headers(api_key),
            EmbeddingError,
            self.name.value,
            timeout=self._timeout,
        )
        data = body.get("data") if isinstance(body, dict) else None
        if not data or not isinstance(data, list) or not isinstance(data[0], dict):
            raise EmbeddingError("no embeddings returned", provider=self.name.value)
        return data[0].get("embedding")
