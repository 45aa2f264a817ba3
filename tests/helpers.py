"""
Shared test doubles and builders.

Imported by test modules; fixtures live in conftest.py.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import MagicMock

import httpx

from rag_service.boundary.embeddings.base import EmbeddingProvider
from rag_service.boundary.llm.base import GenerationClient
from rag_service.configs.embeddings import EmbeddingProviderName
from rag_service.core.exceptions import EmbeddingError
from rag_service.models.chunk import Chunk


def make_chunk(
    chunk_id: str,
    embedding: list[float] | None,
    doc_id: str = "doc-1",
    content: str | None = None,
    index: int = 0,
) -> Chunk:
    """Build a chunk with sensible defaults."""
    return Chunk(
        id=chunk_id,
        doc_id=doc_id,
        content=content or f"content of {chunk_id}",
        index=index,
        embedding=embedding,
    )


class StubEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic provider: maps known texts to vectors, everything else
    to a fixed fallback vector. Optionally fails on the Nth call.
    """

    name = EmbeddingProviderName.OLLAMA
    requires_api_key = False

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        fallback: list[float] | None = None,
        fail_on_call: int | None = None,
        dimensions: int | None = 3,
    ) -> None:
        super().__init__(MagicMock(spec=httpx.AsyncClient), model="stub", dimensions=dimensions)
        self.vectors = vectors or {}
        self.fallback = fallback or [1.0, 0.0, 0.0]
        self.fail_on_call = fail_on_call
        self.calls: list[str] = []

    async def _request_embedding(self, text: str, api_key: str | None) -> Any:
        self.calls.append(text)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise EmbeddingError("stub embedding failure", provider=self.name.value)
        return self.vectors.get(text, self.fallback)


class StubGenerationClient(GenerationClient):
    """Generation double with canned answer, deltas and optional failures."""

    name = "stub"
    supports_streaming = True

    def __init__(
        self,
        answer: str = "stub answer",
        deltas: list[str] | None = None,
        fail_after: int | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(MagicMock(spec=httpx.AsyncClient), default_model="stub-model")
        self.answer = answer
        self.deltas = deltas if deltas is not None else ["Hello", ", ", "world"]
        self.fail_after = fail_after
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate(self, system_prompt, user_message, model=None, api_key=None) -> str:
        self.calls.append(
            {"system_prompt": system_prompt, "user_message": user_message, "model": model, "api_key": api_key}
        )
        if self.error is not None:
            raise self.error
        return self.answer

    async def stream(
        self,
        system_prompt,
        user_message,
        model=None,
        api_key=None,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[str]:
        self.calls.append(
            {"system_prompt": system_prompt, "user_message": user_message, "model": model, "api_key": api_key}
        )
        for position, delta in enumerate(self.deltas):
            if self.fail_after is not None and position == self.fail_after:
                raise self.error
            if cancel_event is not None and cancel_event.is_set():
                return
            yield delta

        if self.fail_after is not None and self.fail_after >= len(self.deltas):
            raise self.error
