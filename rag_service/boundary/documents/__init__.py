"""Document bookkeeping boundary."""

from rag_service.boundary.documents.metadata_store import MetadataStore

__all__ = ["MetadataStore"]
