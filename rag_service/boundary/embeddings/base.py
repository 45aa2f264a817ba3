"""
Embedding provider interface.

Every backend turns one text into one fixed-dimension vector. Failures
of any kind surface as EmbeddingError; nothing is retried here.

Dependencies: httpx, rag_service.core.exceptions
System role: Polymorphic embedding capability
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any

import httpx

from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError, UnauthorizedError

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Base class for embedding backends."""

    name: EmbeddingProviderName
    requires_api_key: bool = True

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        model: str,
        dimensions: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            http_client: Shared async HTTP client
            model: Embedding model identifier
            dimensions: Expected vector length (unchecked when None)
            timeout: Per-request timeout in seconds
        """
        self._client = http_client
        self.model = model
        self.dimensions = dimensions
        self._timeout = timeout

    async def embed(self, text: str, api_key: str | None = None) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed
            api_key: Backend credential (ignored by backends that need none)

        Returns:
            list[float]: Embedding vector of the configured dimension

        Raises:
            UnauthorizedError: When a required credential is missing
            EmbeddingError: On transport, status, payload or dimension failure
        """
        if self.requires_api_key and not api_key:
            raise UnauthorizedError(
                f"API key is required for {self.name.value} embeddings",
                provider=self.name.value,
            )

        vector = await self._request_embedding(text, api_key)
        return self._validate_vector(vector)

    @abstractmethod
    async def _request_embedding(self, text: str, api_key: str | None) -> Any:
        """Call the backend and return the raw vector from its response."""

    def _validate_vector(self, vector: Any) -> list[float]:
        if not isinstance(vector, list) or not vector:
            raise EmbeddingError(
                f"no embedding returned from {self.name.value}",
                provider=self.name.value,
            )
        try:
            values = [float(value) for value in vector]
        except (TypeError, ValueError) as e:
            raise EmbeddingError(
                f"malformed embedding returned from {self.name.value}",
                provider=self.name.value,
            ) from e
        if not all(math.isfinite(value) for value in values):
            raise EmbeddingError(
                f"non-finite embedding values returned from {self.name.value}",
                provider=self.name.value,
            )
        if self.dimensions is not None and len(values) != self.dimensions:
            raise EmbeddingError(
                f"{self.name.value} returned dimension {len(values)}, expected {self.dimensions}",
                provider=self.name.value,
                details={"model": self.model},
            )
        return values
