"""
Test suite for the embedding service.

System role: Verification of query embedding and all-or-nothing batch embedding
"""

import pytest

from rag_service.application.chunker import TextChunker
from rag_service.application.embedder import EmbeddingService
from rag_service.boundary.vdb.vector_store import VectorStore
from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError, UnauthorizedError
from tests.helpers import StubEmbeddingProvider


class KeyedStubProvider(StubEmbeddingProvider):
    name = EmbeddingProviderName.OPENROUTER
    requires_api_key = True


class TestEmbedChunks:
    """Batch embedding."""

    @pytest.mark.asyncio
    async def test_returns_embedded_copies_in_order(self):
        # Arrange
        provider = StubEmbeddingProvider(vectors={"a": [1.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0]})
        service = EmbeddingService(provider)
        chunks = TextChunker(chunk_size=1, chunk_overlap=0).chunk("doc-1", "ab")

        # Act
        embedded = await service.embed_chunks(chunks)

        # Assert
        assert [chunk.embedding for chunk in embedded] == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
        assert [chunk.id for chunk in embedded] == [chunk.id for chunk in chunks]
        assert all(chunk.embedding is None for chunk in chunks)
        assert provider.calls == ["a", "b"]

    @pytest.mark.asyncio
    async def test_failure_on_third_of_five_leaves_index_empty(self, store_dir):
        # Arrange
        provider = StubEmbeddingProvider(fail_on_call=3)
        service = EmbeddingService(provider)
        store = VectorStore(store_dir)
        chunks = TextChunker(chunk_size=2, chunk_overlap=0).chunk("doc-1", "aabbccddee")
        assert len(chunks) == 5

        # Act
        with pytest.raises(EmbeddingError):
            embedded = await service.embed_chunks(chunks)
            store.add(embedded)

        # Assert
        assert provider.calls == ["aa", "bb", "cc"]
        assert store.count() == 0
        assert all(chunk.embedding is None for chunk in chunks)

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_first_call(self):
        provider = KeyedStubProvider()
        service = EmbeddingService(provider)
        chunks = TextChunker(chunk_size=2, chunk_overlap=0).chunk("doc-1", "aabb")

        with pytest.raises(UnauthorizedError):
            await service.embed_chunks(chunks, api_key="")

        assert provider.calls == []


class TestEmbedQuery:
    """Single query embedding."""

    @pytest.mark.asyncio
    async def test_returns_provider_vector(self):
        service = EmbeddingService(StubEmbeddingProvider(vectors={"q": [0.0, 0.0, 1.0]}))

        assert await service.embed_query("q") == [0.0, 0.0, 1.0]

    @pytest.mark.asyncio
    async def test_key_is_passed_through(self):
        provider = KeyedStubProvider()

        await EmbeddingService(provider).embed_query("q", api_key="sk")

        assert provider.calls == ["q"]
