"""
OpenRouter generation client.

OpenAI-compatible chat completions with system and user messages.
Streaming reads Server-Sent Events until the [DONE] sentinel.

Dependencies: httpx
System role: Hosted LLM adapter
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from rag_service.boundary.http_utils import (
    bearer_headers,
    post_json,
    raise_for_upstream_status,
    upstream_error_message,
)
from rag_service.boundary.llm.base import GenerationClient, cancelled
from rag_service.core.exceptions import GenerationError

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"


def _message_text(content: Any) -> str:
    """Primary text of a message content field (string or list of parts)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        for part in content:
            if isinstance(part, dict) and part.get("type", "text") == "text" and part.get("text"):
                return part["text"]
    return ""


class OpenRouterClient(GenerationClient):
    """OpenRouter chat completions client."""

    name = "openrouter"
    supports_streaming = True

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        default_model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_url: str | None = None,
        app_title: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(http_client, default_model, timeout)
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._app_url = app_url
        self._app_title = app_title

    def _headers(self, api_key: str) -> dict[str, str]:
        headers = bearer_headers(api_key)
        if self._app_url:
            headers["HTTP-Referer"] = self._app_url
        if self._app_title:
            headers["X-Title"] = self._app_title
        return headers

    def _payload(self, system_prompt: str, user_message: str, model: str, stream: bool) -> dict:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "stream": stream,
        }

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
            self._url,
            self._payload(system_prompt, user_message, self.resolve_model(model), stream=False),
            self._headers(key),
            GenerationError,
            self.name,
            timeout=self._timeout,
        )

        choices = body.get("choices") if isinstance(body, dict) else None
        if not choices:
            raise GenerationError("no response from OpenRouter", provider=self.name)

        for choice in choices:
            message = choice.get("message") if isinstance(choice, dict) else None
            text = _message_text(message.get("content")) if isinstance(message, dict) else ""
            if text:
                return text

        raise GenerationError("no text content found in OpenRouter response", provider=self.name)

    async def stream(
        self,
        system_prompt: str,
        user_message: str,
        model: str | None = None,
        api_key: str | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[str]:
        key = self.require_api_key(api_key)
        payload = self._payload(system_prompt, user_message, self.resolve_model(model), stream=True)

        try:
            async with self._client.stream(
                "POST",
                self._url,
                json=payload,
                headers=self._headers(key),
                **self._request_kwargs(),
            ) as response:
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise_for_upstream_status(response, GenerationError, self.name, body)

                async for line in response.aiter_lines():
                    if cancelled(cancel_event):
                        logger.info(f"{__name__}:stream - Cancelled by consumer")
                        return

                    if not line.startswith("data:"):
                        continue
                    data = line[len("data:"):].strip()
                    if not data:
                        continue
                    if data == DONE_SENTINEL:
                        return

                    try:
                        event = json.loads(data)
                    except json.JSONDecodeError:
                        logger.debug(f"{__name__}:stream - Skipping malformed event")
                        continue

                    message = upstream_error_message(event)
                    if message:
                        raise GenerationError(f"OpenRouter API error: {message}", provider=self.name)

                    for choice in event.get("choices") or []:
                        delta = _message_text((choice.get("delta") or {}).get("content"))
                        if delta:
                            yield delta
        except httpx.HTTPError as e:
            raise GenerationError(f"failed to read OpenRouter stream: {e}", provider=self.name) from e
