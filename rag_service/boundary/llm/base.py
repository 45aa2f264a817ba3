"""
Generation client interface.

A generation client answers a (system prompt, user message) pair either
in one shot or as an ordered sequence of text deltas. Streaming is a
cooperative async generator: the consumer pulls deltas as they arrive
and may stop early through a cancellation event checked between deltas.

Dependencies: httpx, rag_service.core.exceptions
System role: Polymorphic LLM capability
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx

from rag_service.core.exceptions import StreamingNotSupportedError, UnauthorizedError

logger = logging.getLogger(__name__)

DeltaCallback = Callable[[str], Awaitable[None] | None]


class GenerationClient(ABC):
    """Base class for generation backends."""

    name: str
    supports_streaming: bool = False

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        default_model: str,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            http_client: Shared async HTTP client
            default_model: Model used when a request does not override it
            timeout: Per-request timeout in seconds
        """
        self._client = http_client
        self.default_model = default_model
        self._timeout = timeout

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_message: str,
        model: str | None = None,
        api_key: str | None = None,
    ) -> str:
        """
        Produce a complete response.

        Returns:
            str: First non-empty text segment of the response

        Raises:
            UnauthorizedError: When api_key is missing
            GenerationError: On transport, status or payload failure, or an empty response
        """

    async def stream(
        self,
        system_prompt: str,
        user_message: str,
        model: str | None = None,
        api_key: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[str]:
        """
        Yield response text deltas in arrival order.

        Raises:
            StreamingNotSupportedError: When the backend cannot stream
        """
        raise StreamingNotSupportedError(
            f"streaming not supported for provider: {self.name}",
            provider=self.name,
        )
        yield  # pragma: no cover

    async def generate_stream(
        self,
        system_prompt: str,
        user_message: str,
        on_delta: DeltaCallback,
        model: str | None = None,
        api_key: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """
        Push each delta to a callback; returns when the stream ends.

        Args:
            on_delta: Sync or async callable invoked once per delta
        """
        async for delta in self.stream(
            system_prompt,
            user_message,
            model=model,
            api_key=api_key,
            cancel_event=cancel_event,
        ):
            result = on_delta(delta)
            if inspect.isawaitable(result):
                await result

    def resolve_model(self, model: str | None) -> str:
        return model or self.default_model

    def require_api_key(self, api_key: str | None) -> str:
        if not api_key:
            raise UnauthorizedError(f"{self.name} API key is required", provider=self.name)
        return api_key

    def _request_kwargs(self) -> dict:
        return {"timeout": self._timeout} if self._timeout is not None else {}


def cancelled(cancel_event: asyncio.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()
