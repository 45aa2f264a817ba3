"""
Ollama embedding backend.

Calls a local Ollama server; no credential is needed.

Dependencies: httpx
System role: Local inference embedding adapter
"""

from typing import Any

import httpx

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.http_utils import bearer_headers, post_json
from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embeddings from Ollama's /api/embeddings endpoint."""

    name = EmbeddingProviderName.OLLAMA
    requires_api_key = False

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        model: str,
        base_url: str = "http://localhost:11434",
        dimensions: int | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(http_client, model, dimensions, timeout)
        self._url = f"{base_url.rstrip('/')}/api/embeddings"

    async def _request_embedding(self, text: str, api_key: str | None) -> Any:
        body = await post_json(
            self._client,
            self._url,
            {"model": self.model, "prompt": text},
            bearer_headers(None),
            EmbeddingError,
            self.name.value,
            timeout=self._timeout,
        )
        if not isinstance(body, dict):
            raise EmbeddingError("unexpected Ollama response shape", provider=self.name.value)
        return body.get("embedding")
