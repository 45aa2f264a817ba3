"""
AWS Bedrock generation client.

Uses the Converse API with API-key bearer auth. The system prompt is
folded into the single user turn. Streaming responses arrive in the AWS
binary event-stream encoding and are decoded with botocore.

Dependencies: httpx, botocore.eventstream
System role: Hosted LLM adapter
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx
from botocore.eventstream import EventStreamBuffer, ParserError

from rag_service.boundary.http_utils import (
    bearer_headers,
    post_json,
    raise_for_upstream_status,
)
from rag_service.boundary.llm.base import GenerationClient, cancelled
from rag_service.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


def _header(headers: dict, name: str) -> str:
    value = headers.get(name, "")
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class BedrockClient(GenerationClient):
    """Bedrock Converse / ConverseStream client."""

    name = "bedrock"
    supports_streaming = True

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        default_model: str,
        runtime_url: str,
        timeout: float | None = None,
    ) -> None:
        super().__init__(http_client, default_model, timeout)
        self._runtime_url = runtime_url.rstrip("/")

    def _url(self, model: str, action: str) -> str:
        return f"{self._runtime_url}/model/{quote(model, safe='')}/{action}"

    @staticmethod
    def _payload(system_prompt: str, user_message: str) -> dict[str, Any]:
        full_message = user_message
        if system_prompt:
            full_message = f"System: {system_prompt}\n\nUser: {user_message}"
        return {"messages": [{"role": "user", "content": [{"text": full_message}]}]}

    async def generate(
        self,
        system_prompt: str,
        user_message: str,
        model: str | None = None,
        api_key: str | None = None,
    ) -> str:
        key = self.require_api_key(api_key)
        body = await post_json(
            self._client,
            self._url(self.resolve_model(model), "converse"),
            self._payload(system_prompt, user_message),
            bearer_headers(key),
            GenerationError,
            self.name,
            timeout=self._timeout,
        )

        message = ((body or {}).get("output") or {}).get("message") or {}
        content = message.get("content") or []
        if not content:
            raise GenerationError("no response from Bedrock", provider=self.name)

        # Reasoning blocks carry no "text"; take the first block that does
        for block in content:
            if isinstance(block, dict) and block.get("text"):
                return block["text"]

        raise GenerationError("no text content found in Bedrock response", provider=self.name)

    async def stream(
        self,
        system_prompt: str,
        user_message: str,
        model: str | None = None,
        api_key: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[str]:
        key = self.require_api_key(api_key)
        url = self._url(self.resolve_model(model), "converse-stream")

        try:
            async with self._client.stream(
                "POST",
                url,
                json=self._payload(system_prompt, user_message),
                headers=bearer_headers(key),
                **self._request_kwargs(),
            ) as response:
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise_for_upstream_status(response, GenerationError, self.name, body)

                buffer = EventStreamBuffer()
                async for data in response.aiter_bytes():
                    buffer.add_data(data)
                    for message in buffer:
                        if cancelled(cancel_event):
                            logger.info(f"{__name__}:stream - Cancelled by consumer")
                            return

                        event_type, payload = self._decode_message(message)
                        if event_type == "contentBlockDelta":
                            text = (payload.get("delta") or {}).get("text")
                            if text:
                                yield text
                        elif event_type == "messageStop":
                            return
        except ParserError as e:
            raise GenerationError(f"malformed Bedrock event stream: {e}", provider=self.name) from e
        except httpx.HTTPError as e:
            raise GenerationError(f"failed to read Bedrock stream: {e}", provider=self.name) from e

    def _decode_message(self, message) -> tuple[str, dict]:
        """
        Split an event-stream message into (event type, JSON payload).

        Raises:
            GenerationError: For exception/error frames
        """
        headers = message.headers
        message_type = _header(headers, ":message-type")

        try:
            payload = json.loads(message.payload or b"{}")
        except json.JSONDecodeError:
            payload = {}

        if message_type == "exception":
            exception_type = _header(headers, ":exception-type")
            raise GenerationError(
                f"Bedrock stream {exception_type}: {payload.get('message', 'unknown error')}",
                provider=self.name,
            )
        if message_type == "error":
            raise GenerationError(
                f"Bedrock stream error {_header(headers, ':error-code')}: "
                f"{_header(headers, ':error-message')}",
                provider=self.name,
            )
        return _header(headers, ":event-type"), payload if isinstance(payload, dict) else {}
