"""
Document API endpoints.

Routes: POST /upload, GET /documents, DELETE /documents/{document_id}

Dependencies: rag_service.application.services.document_service
System role: Document HTTP API
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile, status

from rag_service.api.deps import get_document_service, get_settings_dependency
from rag_service.application.services.document_service import DocumentService
from rag_service.configs import Settings
from rag_service.core.exceptions import ValidationError
from rag_service.models.document import DeleteResponse, DocumentMetadata, UploadResponse
from rag_service.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)
router = APIRouter(tags=["documents"])

ALLOWED_EXTENSIONS = {".txt", ".md"}
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
) -> UploadResponse:
    """
    Upload and ingest a text or markdown document.

    Args:
        file: Multipart file field
        document_service: Document service (injected)
        settings: Application settings (injected)

    Returns:
        UploadResponse: New document ID and chunk count

    Raises:
        ValidationError: Bad extension, oversized, empty or non-UTF-8 file
    """
    file_name = Path(file.filename or "").name
    extension = Path(file_name).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            "only .txt and .md files are supported",
            field="file",
            details={"file_name": file_name},
        )

    data = await file.read(MAX_FILE_SIZE + 1)
    if len(data) > MAX_FILE_SIZE:
        raise ValidationError("file too large (max 50MB)", field="file")
    if not data:
        raise ValidationError("file is empty", field="file")

    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError("file is not valid UTF-8 text", field="file") from e

    log_with_context(
        logger,
        logging.INFO,
        f"{__name__}:upload_document - Ingesting upload",
        file_name=file_name,
        file_size=len(data),
    )

    api_key = settings.api_key_for(settings.embeddings.provider.value)
    document = await document_service.ingest(
        file_name=file_name,
        content=content,
        file_size=len(data),
        file_type=extension,
        api_key=api_key,
    )
    return UploadResponse(
        document_id=document.id,
        file_name=document.file_name,
        chunk_count=len(document.chunks),
    )


@router.get("/documents", response_model=list[DocumentMetadata])
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentMetadata]:
    """List ingested documents, oldest first."""
    return document_service.list_documents()


@router.delete("/documents/{document_id}", response_model=DeleteResponse)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DeleteResponse:
    """Delete a document and all of its fragments."""
    await document_service.delete_document(document_id)
    return DeleteResponse()
