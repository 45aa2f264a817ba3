"""
Document service orchestrator.

Coordinates ingestion (chunk, embed, store), listing and deletion of
documents. Embedding happens for the whole batch before anything is
written to the index, so a failed upload leaves no fragments behind.

Dependencies: rag_service.application, rag_service.boundary
System role: Document management orchestration
"""

import glob
import logging
import uuid
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from rag_service.application.chunker import TextChunker
from rag_service.application.embedder import EmbeddingService
from rag_service.boundary.documents.metadata_store import MetadataStore
from rag_service.boundary.vdb.vector_store import VectorStore
from rag_service.core.exceptions import (
    InternalError,
    NotFoundError,
    ValidationError,
    VectorStoreError,
)
from rag_service.models.document import Document, DocumentMetadata

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: ingestion, listing, deletion.
    """

    def __init__(
        self,
        chunker: TextChunker,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        metadata_store: MetadataStore,
        upload_dir: str | Path,
    ) -> None:
        self.chunker = chunker
        self.embedding_service = embedding_service
        self.vector_store = vector_store
        self.metadata_store = metadata_store
        self.upload_dir = Path(upload_dir)

    async def ingest(
        self,
        file_name: str,
        content: str,
        file_size: int,
        file_type: str,
        api_key: str | None = None,
    ) -> Document:
        """
        Ingest a text document.

        Steps:
        1. Chunk the text
        2. Embed every chunk (all or nothing)
        3. Save the original text under upload_dir
        4. Insert the embedded chunks into the index
        5. Record metadata (failure here is logged, not raised; also recorded
           when the index snapshot write fails, so the document stays deletable)

        Args:
            file_name: Original file name
            content: Decoded document text
            file_size: Size in bytes of the uploaded file
            file_type: Extension, e.g. '.md'
            api_key: Embedding provider credential

        Returns:
            Document: Ingested document with its embedded chunks

        Raises:
            ValidationError: When content is empty
            UnauthorizedError: When the embedding credential is missing
            EmbeddingError: When any chunk fails to embed
            VectorStoreError: When the index snapshot cannot be written
        """
        if not content or not content.strip():
            raise ValidationError("document is empty", field="content")

        doc_id = str(uuid.uuid4())
        chunks = self.chunker.chunk(doc_id, content)
        logger.info(
            f"{__name__}:ingest - Split {file_name} into {len(chunks)} chunks",
            extra={"doc_id": doc_id, "chunk_count": len(chunks)},
        )

        embedded = await self.embedding_service.embed_chunks(chunks, api_key)

        await run_in_threadpool(self._save_original, doc_id, file_name, content)

        document = Document(id=doc_id, file_name=file_name, content=content, chunks=embedded)
        metadata = DocumentMetadata(
            id=doc_id,
            file_name=file_name,
            file_size=file_size,
            file_type=file_type,
            chunk_count=len(embedded),
            uploaded_at=document.created_at,
        )

        try:
            await run_in_threadpool(self.vector_store.add, embedded)
        except VectorStoreError:
            # Fragments are already in memory; keep them listable and deletable
            await self._record_metadata(metadata)
            raise

        await self._record_metadata(metadata)

        logger.info(f"{__name__}:ingest - Document ingested", extra={"doc_id": doc_id})
        return document

    def list_documents(self) -> list[DocumentMetadata]:
        return self.metadata_store.list()

    async def delete_document(self, doc_id: str) -> int:
        """
        Delete a document's metadata and all of its fragments.

        A document whose metadata was never recorded is still deleted when
        the index holds fragments for it.

        Returns:
            int: Number of fragments removed from the index

        Raises:
            NotFoundError: When neither metadata nor fragments exist for the ID
        """
        metadata = self.metadata_store.get(doc_id)
        removed = await run_in_threadpool(self.vector_store.delete_by_doc_id, doc_id)
        if metadata is None and removed == 0:
            raise NotFoundError(f"document {doc_id} not found", resource_id=doc_id)

        if metadata is not None:
            await run_in_threadpool(self.metadata_store.delete, doc_id)
        await run_in_threadpool(self._remove_originals, doc_id)

        logger.info(
            f"{__name__}:delete_document - Deleted document",
            extra={"doc_id": doc_id, "removed_chunks": removed},
        )
        return removed

    async def _record_metadata(self, metadata: DocumentMetadata) -> None:
        try:
            await run_in_threadpool(self.metadata_store.add, metadata)
        except InternalError as e:
            logger.warning(
                f"{__name__}:ingest - Failed to record metadata",
                extra={"doc_id": metadata.id, "error_msg": str(e)},
            )

    def _original_path(self, doc_id: str, file_name: str) -> Path:
        return self.upload_dir / f"{doc_id}_{Path(file_name).name}"

    def _save_original(self, doc_id: str, file_name: str, content: str) -> None:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            self._original_path(doc_id, file_name).write_text(content, encoding="utf-8")
        except OSError as e:
            raise InternalError(f"failed to save uploaded file: {e}") from e

    def _remove_originals(self, doc_id: str) -> None:
        if not self.upload_dir.is_dir():
            return
        for path in self.upload_dir.glob(f"{glob.escape(doc_id)}_*"):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(
                    f"{__name__}:_remove_originals - Could not remove uploaded file",
                    extra={"doc_id": doc_id, "error_msg": str(e)},
                )
