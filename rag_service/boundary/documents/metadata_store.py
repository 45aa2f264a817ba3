"""
Document metadata store.

Keeps one DocumentMetadata record per ingested document in a single
JSON file (documents.json). Every mutation rewrites the file while
holding the store lock.

Dependencies: pydantic
System role: Durable document bookkeeping
"""

import logging
import threading
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from rag_service.core.exceptions import InternalError
from rag_service.models.document import DocumentMetadata

logger = logging.getLogger(__name__)

METADATA_FILE_NAME = "documents.json"

_records_adapter = TypeAdapter(dict[str, DocumentMetadata])


class MetadataStore:
    """JSON-file backed document metadata."""

    def __init__(self, store_path: str | Path) -> None:
        """
        Args:
            store_path: Directory holding documents.json

        Raises:
            InternalError: When the directory or existing file cannot be read
        """
        self._store_path = Path(store_path)
        self._lock = threading.Lock()
        self._records: dict[str, DocumentMetadata] = {}

        try:
            self._store_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InternalError(f"failed to create metadata directory: {e}") from e

        self._load()

    @property
    def file_path(self) -> Path:
        return self._store_path / METADATA_FILE_NAME

    def add(self, metadata: DocumentMetadata) -> None:
        with self._lock:
            self._records[metadata.id] = metadata
            self._save()

    def get(self, doc_id: str) -> DocumentMetadata | None:
        with self._lock:
            return self._records.get(doc_id)

    def list(self) -> list[DocumentMetadata]:
        """All records, oldest upload first."""
        with self._lock:
            return sorted(self._records.values(), key=lambda record: record.uploaded_at)

    def delete(self, doc_id: str) -> bool:
        """
        Remove a record.

        Returns:
            bool: False when no record had that ID
        """
        with self._lock:
            if self._records.pop(doc_id, None) is None:
                return False
            self._save()
            return True

    def _save(self) -> None:
        # Caller holds the lock
        try:
            self.file_path.write_bytes(_records_adapter.dump_json(self._records, indent=2))
        except OSError as e:
            raise InternalError(
                f"failed to write document metadata: {e}",
                details={"path": str(self.file_path)},
            ) from e

    def _load(self) -> None:
        if not self.file_path.exists():
            return
        try:
            self._records = _records_adapter.validate_json(self.file_path.read_bytes())
        except (OSError, PydanticValidationError) as e:
            raise InternalError(
                f"failed to load document metadata: {e}",
                details={"path": str(self.file_path)},
            ) from e
        logger.info(f"{__name__}:_load - Loaded {len(self._records)} document records")
