"""
Application services.

- ChatService: retrieval-augmented chat, batch and streaming
- DocumentService: document ingestion, listing and deletion
"""

from rag_service.application.services.chat_service import ChatService
from rag_service.application.services.document_service import DocumentService

__all__ = ["ChatService", "DocumentService"]
