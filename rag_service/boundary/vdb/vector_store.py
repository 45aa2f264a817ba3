"""
In-memory vector index with JSON snapshot persistence.

Stores embedded chunks keyed by chunk ID and answers cosine-similarity
queries with a full scan. Every mutation is followed by a snapshot of
the whole index written to a single JSON file (chunk ID -> chunk
record). The in-memory map is authoritative; the file is rebuilt from
it after each write.

Concurrency: searches share a read lock; mutations hold the write lock
only while changing the map and copying it. The copy is written to disk
after the lock is released. Snapshots are versioned so a slow write can
never overwrite the file with an older state than one already written.

Dependencies: pydantic, rag_service.boundary.vdb.similarity
System role: Vector storage and similarity search for RAG retrieval
"""

import logging
import os
import tempfile
import threading
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from rag_service.boundary.vdb.rwlock import ReadWriteLock
from rag_service.boundary.vdb.similarity import cosine_similarity
from rag_service.core.exceptions import ValidationError, VectorStoreError
from rag_service.models.chunk import Chunk, SimilarityResult

logger = logging.getLogger(__name__)

SNAPSHOT_FILE_NAME = "vectors.json"

_snapshot_adapter = TypeAdapter(dict[str, Chunk])


class VectorStore:
    """
    Concurrent in-memory vector index.

    Ties in similarity keep index order: chunks are ranked by score and,
    for equal scores, by when their ID was first inserted.
    """

    def __init__(self, store_path: str | Path, expected_dimensions: int | None = None) -> None:
        """
        Initialize store and load the latest snapshot if one exists.

        Args:
            store_path: Directory holding the snapshot file
            expected_dimensions: Vector dimension enforced on insert and query

        Raises:
            VectorStoreError: When the directory cannot be created or the snapshot is unreadable
        """
        self._store_path = Path(store_path)
        self._expected_dimensions = expected_dimensions
        self._lock = ReadWriteLock()
        self._persist_lock = threading.Lock()
        self._chunks: dict[str, Chunk] = {}
        self._version = 0
        self._persisted_version = 0

        try:
            self._store_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise VectorStoreError(
                f"failed to create vector store directory: {e}",
                operation="init",
                details={"path": str(self._store_path)},
            ) from e

        self._load()

    @property
    def snapshot_path(self) -> Path:
        return self._store_path / SNAPSHOT_FILE_NAME

    @property
    def expected_dimensions(self) -> int | None:
        return self._expected_dimensions

    def add(self, chunks: Iterable[Chunk]) -> None:
        """
        Insert chunks, replacing any with the same ID, then persist.

        Args:
            chunks: Embedded chunks

        Raises:
            ValidationError: When any chunk lacks an embedding or has the wrong dimension
            VectorStoreError: When the snapshot cannot be written
        """
        batch = list(chunks)
        for chunk in batch:
            self._validate_embedding(chunk)

        with self._lock.write():
            for chunk in batch:
                self._chunks[chunk.id] = chunk
            version, snapshot = self._take_snapshot()

        logger.info(
            f"{__name__}:add - Inserted {len(batch)} chunks",
            extra={"chunk_count": len(batch), "index_size": len(snapshot)},
        )
        self._persist_snapshot(version, snapshot, operation="add")

    def search(self, query_embedding: list[float], top_k: int) -> list[SimilarityResult]:
        """
        Rank stored chunks by cosine similarity to the query.

        Args:
            query_embedding: Query vector
            top_k: Maximum number of results

        Returns:
            list[SimilarityResult]: Highest similarity first, at most top_k entries

        Raises:
            ValidationError: When the query is empty, top_k < 1, or the dimension is wrong
        """
        if not query_embedding:
            raise ValidationError("query embedding is empty", field="query_embedding")
        if top_k < 1:
            raise ValidationError("top_k must be at least 1", field="top_k")
        if (
            self._expected_dimensions is not None
            and len(query_embedding) != self._expected_dimensions
        ):
            raise ValidationError(
                "query embedding dimension does not match the index",
                field="query_embedding",
                details={
                    "expected": self._expected_dimensions,
                    "actual": len(query_embedding),
                },
            )

        with self._lock.read():
            if not self._chunks:
                return []
            results = [
                SimilarityResult(
                    chunk=chunk,
                    similarity=cosine_similarity(query_embedding, chunk.embedding),
                )
                for chunk in self._chunks.values()
            ]

        # sorted() is stable with reverse=True, so equal scores keep index order
        results = sorted(results, key=lambda result: result.similarity, reverse=True)
        return results[:top_k]

    def delete_by_doc_id(self, doc_id: str) -> int:
        """
        Remove every chunk belonging to a document, then persist.

        Unknown document IDs are a no-op (the snapshot is still rewritten).

        Args:
            doc_id: Owning document ID

        Returns:
            int: Number of chunks removed

        Raises:
            VectorStoreError: When the snapshot cannot be written
        """
        with self._lock.write():
            doomed = [chunk_id for chunk_id, chunk in self._chunks.items() if chunk.doc_id == doc_id]
            for chunk_id in doomed:
                del self._chunks[chunk_id]
            version, snapshot = self._take_snapshot()

        logger.info(
            f"{__name__}:delete_by_doc_id - Removed {len(doomed)} chunks",
            extra={"doc_id": doc_id, "removed": len(doomed)},
        )
        self._persist_snapshot(version, snapshot, operation="delete")
        return len(doomed)

    def clear(self) -> None:
        """
        Remove all chunks and persist an empty snapshot.

        Raises:
            VectorStoreError: When the snapshot cannot be written
        """
        with self._lock.write():
            self._chunks = {}
            version, snapshot = self._take_snapshot()

        logger.info(f"{__name__}:clear - Vector store cleared")
        self._persist_snapshot(version, snapshot, operation="clear")

    def get_all(self) -> list[Chunk]:
        """All stored chunks in index order."""
        with self._lock.read():
            return list(self._chunks.values())

    def count(self) -> int:
        with self._lock.read():
            return len(self._chunks)

    def __len__(self) -> int:
        return self.count()

    def _validate_embedding(self, chunk: Chunk) -> None:
        if not chunk.embedding:
            raise ValidationError(
                f"chunk {chunk.id} has no embedding",
                field="embedding",
                details={"chunk_id": chunk.id},
            )
        if (
            self._expected_dimensions is not None
            and len(chunk.embedding) != self._expected_dimensions
        ):
            raise ValidationError(
                f"chunk {chunk.id} has embedding dimension {len(chunk.embedding)}, "
                f"expected {self._expected_dimensions}",
                field="embedding",
                details={"chunk_id": chunk.id},
            )

    def _take_snapshot(self) -> tuple[int, dict[str, Chunk]]:
        # Caller holds the write lock. Chunks are never mutated after insert,
        # so a shallow copy of the map is an immutable view.
        self._version += 1
        return self._version, dict(self._chunks)

    def _persist_snapshot(self, version: int, snapshot: dict[str, Chunk], operation: str) -> None:
        """
        Write a snapshot unless a newer one has already been written.

        Raises:
            VectorStoreError: When serialization or the file write fails
        """
        with self._persist_lock:
            if version <= self._persisted_version:
                logger.debug(
                    f"{__name__}:_persist_snapshot - Skipping stale snapshot",
                    extra={"version": version, "persisted_version": self._persisted_version},
                )
                return

            try:
                data = _snapshot_adapter.dump_json(snapshot, indent=2)
                self._atomic_write(data)
            except (OSError, ValueError) as e:
                logger.error(
                    f"{__name__}:_persist_snapshot - Snapshot write FAILED; "
                    "in-memory index and disk snapshot now differ",
                    extra={
                        "operation": operation,
                        "path": str(self.snapshot_path),
                        "error_type": type(e).__name__,
                        "error_msg": str(e),
                    },
                )
                raise VectorStoreError(
                    f"failed to write vector store: {e}",
                    operation=operation,
                    details={"path": str(self.snapshot_path)},
                ) from e

            self._persisted_version = version

    def _atomic_write(self, data: bytes) -> None:
        fd, tmp_path = tempfile.mkstemp(
            dir=self._store_path,
            prefix=".vectors-",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, self.snapshot_path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _load(self) -> None:
        """Populate the index from the snapshot file; a missing file means empty."""
        path = self.snapshot_path
        if not path.exists():
            logger.info(f"{__name__}:_load - No snapshot at {path}, starting empty")
            return

        try:
            chunks = _snapshot_adapter.validate_json(path.read_bytes())
        except (OSError, PydanticValidationError) as e:
            raise VectorStoreError(
                f"failed to load vector store: {e}",
                operation="load",
                details={"path": str(path)},
            ) from e

        dimensions = {len(chunk.embedding or []) for chunk in chunks.values()}
        if self._expected_dimensions is not None and dimensions - {self._expected_dimensions}:
            logger.warning(
                f"{__name__}:_load - Snapshot holds vectors of dimension {sorted(dimensions)}, "
                f"configured dimension is {self._expected_dimensions}; "
                "mismatched chunks will never match a query",
            )

        self._chunks = chunks
        logger.info(
            f"{__name__}:_load - Loaded {len(chunks)} chunks from snapshot",
            extra={"path": str(path), "chunk_count": len(chunks)},
        )
