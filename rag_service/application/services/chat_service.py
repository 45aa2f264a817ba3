"""
Chat service orchestrator.

Answers a question with retrieval-augmented generation:
validate -> embed question -> top-K search -> augment system prompt ->
generate (batch) or stream deltas as events.

Dependencies: rag_service.application, rag_service.boundary, rag_service.core
System role: Retrieval orchestrator for chat endpoints
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass

from fastapi.concurrency import run_in_threadpool

from rag_service.application.embedder import EmbeddingService
from rag_service.boundary.llm.base import GenerationClient
from rag_service.boundary.vdb.vector_store import VectorStore
from rag_service.configs.rag import RAGSettings
from rag_service.core.exceptions import RAGServiceException, UnauthorizedError, ValidationError
from rag_service.core.prompting import (
    SystemPromptSource,
    build_context,
    build_system_prompt,
    context_texts,
    resolve_system_prompt,
)
from rag_service.core.tokenizer import count_tokens_for_messages, estimate_tokens
from rag_service.models.chat import ChatRequest, ChatResponse, TokenMetrics
from rag_service.models.streaming import StreamEvent

logger = logging.getLogger(__name__)

CredentialLookup = Callable[[str], str | None]


@dataclass
class PreparedChat:
    """Everything needed to call the generation backend for one request."""

    client: GenerationClient
    api_key: str
    base_prompt: str
    system_prompt: str
    context: list[str]
    context_block: str


class ChatService:
    """
    Chat service orchestrator.

    Coordinates the embedding service, vector store and generation
    backends for batch and streaming chat.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        generation_clients: Mapping[str, GenerationClient],
        rag_settings: RAGSettings,
        credentials: CredentialLookup,
        system_prompt_source: SystemPromptSource | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            embedding_service: Query embedding
            vector_store: Fragment index
            generation_clients: Backends keyed by provider name
            rag_settings: Retrieval depth and default system prompt
            credentials: Maps a provider name to its API key
            system_prompt_source: Optional callable returning a stored default prompt
        """
        self.embedding_service = embedding_service
        self.vector_store = vector_store
        self.generation_clients = dict(generation_clients)
        self.rag_settings = rag_settings
        self._credentials = credentials
        self._system_prompt_source = system_prompt_source

    def validate(self, request: ChatRequest) -> tuple[GenerationClient, str]:
        """
        Check a request before any external call.

        Returns:
            tuple[GenerationClient, str]: Selected backend and its API key

        Raises:
            ValidationError: Empty message or unknown provider
            UnauthorizedError: Missing generation or embedding credential
        """
        if not request.message or not request.message.strip():
            raise ValidationError("message is required", field="message")

        client = self.generation_clients.get(request.provider)
        if client is None:
            raise ValidationError(
                f"unsupported provider: {request.provider}",
                field="provider",
                details={"supported": sorted(self.generation_clients)},
            )

        api_key = self._credentials(request.provider)
        if not api_key:
            raise UnauthorizedError(
                f"API key is required for {request.provider}",
                provider=request.provider,
            )

        self.embedding_service.check_credentials(self._embedding_key())
        return client, api_key

    async def process_chat(self, request: ChatRequest) -> ChatResponse:
        """
        Answer a question in one shot.

        Args:
            request: Chat request

        Returns:
            ChatResponse: Answer, retrieved context and estimated token usage

        Raises:
            RAGServiceException: Validation, credential, embedding, search or generation failure
        """
        prepared = await self._prepare(request)

        answer = await prepared.client.generate(
            prepared.system_prompt,
            request.message,
            model=request.model,
            api_key=prepared.api_key,
        )

        input_tokens = count_tokens_for_messages(
            prepared.base_prompt, request.message, prepared.context_block
        )
        output_tokens = estimate_tokens(answer)
        logger.info(
            f"{__name__}:process_chat - Answered with {len(prepared.context)} context chunks",
            extra={"provider": request.provider, "output_tokens": output_tokens},
        )

        return ChatResponse(
            message=answer,
            context=prepared.context,
            token_metrics=TokenMetrics(
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            ),
        )

    async def stream_chat(
        self,
        request: ChatRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[StreamEvent]:
        """
        Answer a question as a stream of events.

        Retrieval runs before this returns, so its failures raise here
        instead of appearing in the stream. The returned iterator yields
        one context event, one chunk event per delta, then done; any
        generation failure ends the stream with a single error event.

        Args:
            request: Chat request
            cancel_event: Set by the consumer to stop generation early

        Returns:
            AsyncIterator[StreamEvent]: Event stream

        Raises:
            RAGServiceException: Validation, credential, embedding or search failure
        """
        prepared = await self._prepare(request)
        return self._event_stream(prepared, request, cancel_event)

    async def _event_stream(
        self,
        prepared: PreparedChat,
        request: ChatRequest,
        cancel_event: asyncio.Event | None,
    ) -> AsyncIterator[StreamEvent]:
        yield StreamEvent.context(prepared.context)

        delta_count = 0
        try:
            async for delta in prepared.client.stream(
                prepared.system_prompt,
                request.message,
                model=request.model,
                api_key=prepared.api_key,
                cancel_event=cancel_event,
            ):
                delta_count += 1
                yield StreamEvent.chunk(delta)
        except RAGServiceException as e:
            logger.error(
                f"{__name__}:_event_stream - Generation failed after {delta_count} deltas",
                extra={"provider": request.provider, "error_msg": e.message},
            )
            yield StreamEvent.error(e.message, code=e.status_code)
            return
        except Exception as e:
            logger.exception(
                f"{__name__}:_event_stream - Unexpected streaming failure",
                extra={"provider": request.provider, "error_type": type(e).__name__},
            )
            yield StreamEvent.error("internal error during streaming", code=500)
            return

        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"{__name__}:_event_stream - Stream cancelled by client")
            return

        logger.info(
            f"{__name__}:_event_stream - Stream complete",
            extra={"provider": request.provider, "delta_count": delta_count},
        )
        yield StreamEvent.done()

    async def _prepare(self, request: ChatRequest) -> PreparedChat:
        client, api_key = self.validate(request)

        query_embedding = await self.embedding_service.embed_query(
            request.message, self._embedding_key()
        )
        results = await run_in_threadpool(
            self.vector_store.search,
            query_embedding,
            self.rag_settings.max_context_chunks,
        )
        logger.info(
            f"{__name__}:_prepare - Retrieved {len(results)} chunks",
            extra={"provider": request.provider},
        )

        context_block = build_context(results)
        base_prompt = resolve_system_prompt(
            request.system_prompt,
            self.rag_settings.system_prompt,
            self._system_prompt_source,
        )
        return PreparedChat(
            client=client,
            api_key=api_key,
            base_prompt=base_prompt,
            system_prompt=build_system_prompt(base_prompt, context_block),
            context=context_texts(results),
            context_block=context_block,
        )

    def _embedding_key(self) -> str | None:
        return self._credentials(self.embedding_service.provider_name)
