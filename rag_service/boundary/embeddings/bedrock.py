"""
AWS Bedrock embedding backend.

Invokes a Titan-style embedding model on the Bedrock runtime with
API-key bearer auth.

Dependencies: httpx
System role: Hosted embedding adapter
"""

from typing import Any
from urllib.parse import quote

import httpx

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.http_utils import bearer_headers, post_json
from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError


class BedrockEmbeddingProvider(EmbeddingProvider):
    """Embeddings from Bedrock's /model/{id}/invoke endpoint."""

    name = EmbeddingProviderName.BEDROCK

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        model: str,
        runtime_url: str,
        dimensions: int | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(http_client, model, dimensions, timeout)
        self._url = f"{runtime_url.rstrip('/')}/model/{quote(model, safe='')}/invoke"

    async def _request_embedding(self, text: str, api_key: str | None) -> Any:
        body = await post_json(
            self._client,
            self._url,
            {"inputText": text},
            bearer_headers(api_key),
            EmbeddingError,
            self.name.value,
            timeout=self._timeout,
        )
        if not isinstance(body, dict):
            raise EmbeddingError("unexpected Bedrock response shape", provider=self.name.value)
        return body.get("embedding")
