"""
Embedding service.

Applies the active embedding provider to queries and to whole chunk
batches. A batch either embeds completely or not at all: chunks are
copied, so a failure part-way leaves the caller's chunks untouched and
nothing reaches the index.

Dependencies: rag_service.boundary.embeddings
System role: Embedding stage of ingestion and retrieval
"""

import logging
from collections.abc import Sequence

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.core.exceptions import UnauthorizedError
from rag_service.models.chunk import Chunk

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Query and batch embedding over a single provider."""

    def __init__(self, provider: EmbeddingProvider) -> None:
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return self.provider.name.value

    @property
    def dimensions(self) -> int | None:
        return self.provider.dimensions

    def check_credentials(self, api_key: str | None) -> None:
        """
        Raises:
            UnauthorizedError: When the provider needs a key and none is given
        """
        if self.provider.requires_api_key and not api_key:
            raise UnauthorizedError(
                f"API key is required for {self.provider_name} embeddings",
                provider=self.provider_name,
            )

    async def embed_query(self, text: str, api_key: str | None = None) -> list[float]:
        """
        Embed a query string.

        Raises:
            UnauthorizedError: When the credential is missing
            EmbeddingError: When the provider fails
        """
        self.check_credentials(api_key)
        return await self.provider.embed(text, api_key)

    async def embed_chunks(self, chunks: Sequence[Chunk], api_key: str | None = None) -> list[Chunk]:
        """
        Embed every chunk, one provider call per chunk, in order.

        Args:
            chunks: Chunks to embed
            api_key: Provider credential

        Returns:
            list[Chunk]: New chunk copies carrying their embeddings

        Raises:
            UnauthorizedError: When the credential is missing (before any call)
            EmbeddingError: On the first provider failure; no chunk is returned embedded
        """
        self.check_credentials(api_key)

        embedded: list[Chunk] = []
        for position, chunk in enumerate(chunks):
            try:
                vector = await self.provider.embed(chunk.content, api_key)
            except Exception:
                logger.error(
                    f"{__name__}:embed_chunks - Failed on chunk {position + 1} of {len(chunks)}",
                    extra={"chunk_id": chunk.id, "doc_id": chunk.doc_id},
                )
                raise
            embedded.append(chunk.model_copy(update={"embedding": vector}))

        logger.info(
            f"{__name__}:embed_chunks - Embedded {len(embedded)} chunks",
            extra={"provider": self.provider_name, "chunk_count": len(embedded)},
        )
        return embedded
