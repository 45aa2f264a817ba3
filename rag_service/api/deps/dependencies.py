"""
Dependency injection container.

Builds long-lived collaborators once (HTTP client, providers, vector
store, services) and hands them to routes through FastAPI Depends.

Dependencies: rag_service.configs, rag_service.application, rag_service.boundary
System role: DI container for service injection
"""

import logging

import httpx
from fastapi import Depends

from rag_service.application.chunker import TextChunker
from rag_service.application.embedder import EmbeddingService
from rag_service.application.services import ChatService, DocumentService
from rag_service.boundary.documents.metadata_store import MetadataStore
from rag_service.boundary.embeddings.factory import create_embedding_provider
from rag_service.boundary.llm.base import GenerationClient
from rag_service.boundary.llm.factory import create_generation_clients
from rag_service.boundary.vdb.vector_store import VectorStore
from rag_service.configs import Settings, get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._http_client: httpx.AsyncClient | None = None
        self._vector_store: VectorStore | None = None
        self._metadata_store: MetadataStore | None = None
        self._embedding_service: EmbeddingService | None = None
        self._generation_clients: dict[str, GenerationClient] | None = None
        self._chat_service: ChatService | None = None
        self._document_service: DocumentService | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared outbound client; per-request timeouts are set by each backend."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.settings.rag.http_timeout_seconds,
            )
        return self._http_client

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store."""
        if self._vector_store is None:
            self._vector_store = VectorStore(
                self.settings.storage.vector_store_path,
                expected_dimensions=self.settings.embeddings.dimensions,
            )
        return self._vector_store

    @property
    def metadata_store(self) -> MetadataStore:
        if self._metadata_store is None:
            self._metadata_store = MetadataStore(self.settings.storage.metadata_store_path)
        return self._metadata_store

    @property
    def embedding_service(self) -> EmbeddingService:
        if self._embedding_service is None:
            provider = create_embedding_provider(self.settings, self.http_client)
            self._embedding_service = EmbeddingService(provider)
        return self._embedding_service

    @property
    def generation_clients(self) -> dict[str, GenerationClient]:
        if self._generation_clients is None:
            self._generation_clients = create_generation_clients(self.settings, self.http_client)
        return self._generation_clients

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(
                embedding_service=self.embedding_service,
                vector_store=self.vector_store,
                generation_clients=self.generation_clients,
                rag_settings=self.settings.rag,
                credentials=self.settings.api_key_for,
            )
        return self._chat_service

    @property
    def document_service(self) -> DocumentService:
        """Get cached document service."""
        if self._document_service is None:
            rag = self.settings.rag
            self._document_service = DocumentService(
                chunker=TextChunker(rag.chunk_size, rag.chunk_overlap),
                embedding_service=self.embedding_service,
                vector_store=self.vector_store,
                metadata_store=self.metadata_store,
                upload_dir=self.settings.storage.upload_dir,
            )
        return self._document_service

    async def aclose(self) -> None:
        """Close the HTTP client and clear all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._vector_store = None
        self._metadata_store = None
        self._embedding_service = None
        self._generation_clients = None
        self._chat_service = None
        self._document_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_chat_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatService:
    """
    Get chat service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        ChatService: Shared chat service
    """
    return cache.chat_service


def get_document_service(cache: ServiceCache = Depends(get_service_cache)) -> DocumentService:
    """
    Get document service instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        DocumentService: Shared document service
    """
    return cache.document_service
