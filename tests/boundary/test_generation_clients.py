"""
Test suite for generation clients.

OpenRouter batch and SSE streaming, Bedrock Converse and ConverseStream
(AWS binary event stream), cancellation and the client factory.

System role: Verification of LLM adapters
"""

import asyncio
import binascii
import json
import struct
from unittest.mock import MagicMock

import httpx
import pytest

from rag_service.boundary.llm import (
    BedrockClient,
    GenerationClient,
    OpenRouterClient,
    create_generation_clients,
)
from rag_service.configs import Settings
from rag_service.core.exceptions import GenerationError, StreamingNotSupportedError, UnauthorizedError

BEDROCK_URL = "https://bedrock-runtime.eu-north-1.amazonaws.com"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _sse(*events: str) -> bytes:
    return "".join(f"data: {event}\n\n" for event in events).encode()


def encode_event(headers: dict[str, str], payload: dict | bytes) -> bytes:
    """Encode one AWS event-stream message (string headers only)."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    encoded_headers = b""
    for name, value in headers.items():
        name_bytes = name.encode()
        value_bytes = value.encode()
        encoded_headers += struct.pack("!B", len(name_bytes)) + name_bytes
        encoded_headers += struct.pack("!BH", 7, len(value_bytes)) + value_bytes

    total_length = 12 + len(encoded_headers) + len(body) + 4
    prelude = struct.pack("!II", total_length, len(encoded_headers))
    prelude += struct.pack("!I", binascii.crc32(prelude) & 0xFFFFFFFF)
    message = prelude + encoded_headers + body
    return message + struct.pack("!I", binascii.crc32(message) & 0xFFFFFFFF)


def bedrock_event(event_type: str, payload: dict) -> bytes:
    return encode_event(
        {
            ":event-type": event_type,
            ":content-type": "application/json",
            ":message-type": "event",
        },
        payload,
    )


def text_delta(text: str) -> bytes:
    return bedrock_event("contentBlockDelta", {"contentBlockIndex": 0, "delta": {"text": text}})


async def _collect(stream) -> list[str]:
    return [delta async for delta in stream]


class TestOpenRouterGenerate:
    """Batch chat completions."""

    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self):
        # Arrange
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "Paris"}}]})

        async with _client(handler) as client:
            generator = OpenRouterClient(
                client, default_model="default/model", app_url="http://localhost", app_title="RAG"
            )

            # Act
            answer = await generator.generate("Be brief.", "Capital of France?", api_key="sk-test")

        # Assert
        assert answer == "Paris"
        assert seen["url"] == "https://openrouter.ai/api/v1/chat/completions"
        assert seen["headers"]["Authorization"] == "Bearer sk-test"
        assert seen["headers"]["HTTP-Referer"] == "http://localhost"
        assert seen["headers"]["X-Title"] == "RAG"
        assert seen["body"]["model"] == "default/model"
        assert seen["body"]["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Capital of France?"},
        ]

    @pytest.mark.asyncio
    async def test_model_override_is_used(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["model"] = json.loads(request.content)["model"]
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        async with _client(handler) as client:
            generator = OpenRouterClient(client, default_model="default/model")
            await generator.generate("s", "u", model="other/model", api_key="k")

        assert seen["model"] == "other/model"

    @pytest.mark.asyncio
    async def test_first_non_empty_choice_is_selected(self):
        body = {"choices": [{"message": {"content": ""}}, {"message": {"content": "second"}}]}

        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            answer = await OpenRouterClient(client, "m").generate("s", "u", api_key="k")

        assert answer == "second"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"choices": []}, {"choices": [{"message": {"content": ""}}]}])
    async def test_empty_response_is_generation_error(self, body):
        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            with pytest.raises(GenerationError):
                await OpenRouterClient(client, "m").generate("s", "u", api_key="k")

    @pytest.mark.asyncio
    async def test_missing_key_is_unauthorized(self):
        async with _client(lambda request: httpx.Response(200, json={})) as client:
            with pytest.raises(UnauthorizedError):
                await OpenRouterClient(client, "m").generate("s", "u", api_key=None)

    @pytest.mark.asyncio
    async def test_upstream_status_is_preserved(self):
        async with _client(lambda request: httpx.Response(401, text="bad key")) as client:
            with pytest.raises(GenerationError) as exc_info:
                await OpenRouterClient(client, "m").generate("s", "u", api_key="k")

        assert exc_info.value.upstream_status == 401


class TestOpenRouterStream:
    """SSE streaming."""

    @pytest.mark.asyncio
    async def test_yields_deltas_until_done(self):
        # Arrange
        content = _sse(
            json.dumps({"choices": [{"delta": {"role": "assistant"}}]}),
            json.dumps({"choices": [{"delta": {"content": "Hel"}}]}),
            json.dumps({"choices": [{"delta": {"content": "lo"}}]}),
            "[DONE]",
            json.dumps({"choices": [{"delta": {"content": "ignored"}}]}),
        )
        content = b": OPENROUTER PROCESSING\n\n" + content

        async with _client(lambda request: httpx.Response(200, content=content)) as client:
            # Act
            deltas = await _collect(OpenRouterClient(client, "m").stream("s", "u", api_key="k"))

        # Assert
        assert deltas == ["Hel", "lo"]

    @pytest.mark.asyncio
    async def test_stream_requests_streaming(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["stream"] = json.loads(request.content)["stream"]
            return httpx.Response(200, content=_sse("[DONE]"))

        async with _client(handler) as client:
            await _collect(OpenRouterClient(client, "m").stream("s", "u", api_key="k"))

        assert seen["stream"] is True

    @pytest.mark.asyncio
    async def test_error_event_mid_stream_raises(self):
        content = _sse(
            json.dumps({"choices": [{"delta": {"content": "partial"}}]}),
            json.dumps({"error": {"message": "provider overloaded"}}),
        )
        received = []

        async with _client(lambda request: httpx.Response(200, content=content)) as client:
            with pytest.raises(GenerationError):
                async for delta in OpenRouterClient(client, "m").stream("s", "u", api_key="k"):
                    received.append(delta)

        assert received == ["partial"]

    @pytest.mark.asyncio
    async def test_non_success_status_raises_before_any_delta(self):
        async with _client(lambda request: httpx.Response(503, text="unavailable")) as client:
            with pytest.raises(GenerationError) as exc_info:
                await _collect(OpenRouterClient(client, "m").stream("s", "u", api_key="k"))

        assert exc_info.value.upstream_status == 503

    @pytest.mark.asyncio
    async def test_cancel_event_stops_stream(self):
        content = _sse(
            json.dumps({"choices": [{"delta": {"content": "one"}}]}),
            json.dumps({"choices": [{"delta": {"content": "two"}}]}),
            "[DONE]",
        )
        cancel_event = asyncio.Event()
        received = []

        async with _client(lambda request: httpx.Response(200, content=content)) as client:
            async for delta in OpenRouterClient(client, "m").stream(
                "s", "u", api_key="k", cancel_event=cancel_event
            ):
                received.append(delta)
                cancel_event.set()

        assert received == ["one"]

    @pytest.mark.asyncio
    async def test_generate_stream_invokes_callback_per_delta(self):
        content = _sse(
            json.dumps({"choices": [{"delta": {"content": "a"}}]}),
            json.dumps({"choices": [{"delta": {"content": "b"}}]}),
            "[DONE]",
        )
        received = []

        async def on_delta(text: str) -> None:
            received.append(text)

        async with _client(lambda request: httpx.Response(200, content=content)) as client:
            await OpenRouterClient(client, "m").generate_stream("s", "u", on_delta, api_key="k")

        assert received == ["a", "b"]


class TestBedrockGenerate:
    """Converse API."""

    @pytest.mark.asyncio
    async def test_folds_system_prompt_into_user_turn(self):
        # Arrange
        seen = {}
        body = {"output": {"message": {"role": "assistant", "content": [{"text": "Paris"}]}}}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=body)

        async with _client(handler) as client:
            generator = BedrockClient(client, "openai.gpt-oss-20b-1:0", runtime_url=BEDROCK_URL)

            # Act
            answer = await generator.generate("Be brief.", "Capital?", api_key="bk")

        # Assert
        assert answer == "Paris"
        assert seen["path"].endswith("/converse")
        assert seen["auth"] == "Bearer bk"
        assert seen["body"] == {
            "messages": [
                {"role": "user", "content": [{"text": "System: Be brief.\n\nUser: Capital?"}]}
            ]
        }

    @pytest.mark.asyncio
    async def test_reasoning_blocks_are_skipped(self):
        body = {
            "output": {
                "message": {
                    "content": [
                        {"reasoningContent": {"reasoningText": {"text": "thinking..."}}},
                        {"text": "answer"},
                    ]
                }
            }
        }

        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            answer = await BedrockClient(client, "m", runtime_url=BEDROCK_URL).generate("s", "u", api_key="k")

        assert answer == "answer"

    @pytest.mark.asyncio
    async def test_no_text_block_is_generation_error(self):
        body = {"output": {"message": {"content": [{"reasoningContent": {}}]}}}

        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            with pytest.raises(GenerationError):
                await BedrockClient(client, "m", runtime_url=BEDROCK_URL).generate("s", "u", api_key="k")

    @pytest.mark.asyncio
    async def test_missing_key_is_unauthorized(self):
        async with _client(lambda request: httpx.Response(200, json={})) as client:
            with pytest.raises(UnauthorizedError):
                await BedrockClient(client, "m", runtime_url=BEDROCK_URL).generate("s", "u", api_key="")


class TestBedrockStream:
    """ConverseStream over the AWS event stream."""

    @pytest.mark.asyncio
    async def test_yields_text_deltas_until_message_stop(self):
        # Arrange
        content = b"".join(
            [
                bedrock_event("messageStart", {"role": "assistant"}),
                text_delta("Hel"),
                bedrock_event(
                    "contentBlockDelta",
                    {"contentBlockIndex": 0, "delta": {"reasoningContent": {"text": "hmm"}}},
                ),
                text_delta("lo"),
                bedrock_event("contentBlockStop", {"contentBlockIndex": 0}),
                bedrock_event("messageStop", {"stopReason": "end_turn"}),
                text_delta("ignored"),
            ]
        )
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            return httpx.Response(200, content=content)

        async with _client(handler) as client:
            generator = BedrockClient(client, "m", runtime_url=BEDROCK_URL)

            # Act
            deltas = await _collect(generator.stream("s", "u", api_key="k"))

        # Assert
        assert deltas == ["Hel", "lo"]
        assert seen["path"].endswith("/converse-stream")

    @pytest.mark.asyncio
    async def test_exception_frame_raises_after_earlier_deltas(self):
        content = text_delta("partial") + encode_event(
            {":message-type": "exception", ":exception-type": "throttlingException"},
            {"message": "Too many requests"},
        )
        received = []

        async with _client(lambda request: httpx.Response(200, content=content)) as client:
            with pytest.raises(GenerationError) as exc_info:
                async for delta in BedrockClient(client, "m", runtime_url=BEDROCK_URL).stream(
                    "s", "u", api_key="k"
                ):
                    received.append(delta)

        assert received == ["partial"]
        assert "throttlingException" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_corrupt_frame_is_generation_error(self):
        frame = bytearray(text_delta("x"))
        frame[-1] ^= 0xFF

        async with _client(lambda request: httpx.Response(200, content=bytes(frame))) as client:
            with pytest.raises(GenerationError):
                await _collect(BedrockClient(client, "m", runtime_url=BEDROCK_URL).stream("s", "u", api_key="k"))

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        async with _client(lambda request: httpx.Response(403, json={"message": "denied"})) as client:
            with pytest.raises(GenerationError) as exc_info:
                await _collect(BedrockClient(client, "m", runtime_url=BEDROCK_URL).stream("s", "u", api_key="k"))

        assert exc_info.value.upstream_status == 403


class TestStreamingNotSupported:
    """Default stream implementation."""

    @pytest.mark.asyncio
    async def test_default_stream_raises_unsupported(self):
        class BatchOnlyClient(GenerationClient):
            name = "batch-only"

            async def generate(self, system_prompt, user_message, model=None, api_key=None) -> str:
                return "ok"

        generator = BatchOnlyClient(MagicMock(spec=httpx.AsyncClient), default_model="m")

        with pytest.raises(StreamingNotSupportedError) as exc_info:
            await _collect(generator.stream("s", "u", api_key="k"))

        assert exc_info.value.status_code == 501


class TestCreateGenerationClients:
    """Factory."""

    def test_builds_openrouter_and_bedrock(self):
        clients = create_generation_clients(Settings(), MagicMock(spec=httpx.AsyncClient))

        assert set(clients) == {"openrouter", "bedrock"}
        assert isinstance(clients["openrouter"], OpenRouterClient)
        assert isinstance(clients["bedrock"], BedrockClient)
