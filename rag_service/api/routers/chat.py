"""
Chat API endpoints.

Routes: POST /chat, POST /chat/stream

The streaming route answers with Server-Sent Events. Retrieval errors
surface as normal JSON error responses because they are raised before
the stream opens; generation errors arrive as a final error event.

Dependencies: rag_service.application.services.chat_service
System role: Chat HTTP API
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from rag_service.api.deps import get_chat_service
from rag_service.application.services.chat_service import ChatService
from rag_service.models.chat import ChatRequest, ChatResponse
from rag_service.models.streaming import StreamEvent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a question using the document knowledge base.

    Args:
        request: Chat request with message and provider
        chat_service: Chat service (injected)

    Returns:
        ChatResponse: Answer, retrieved context and token metrics
    """
    return await chat_service.process_chat(request)


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    http_request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Stream an answer as Server-Sent Events.

    Event order: context, chunk (zero or more), then done or error.
    """
    cancel_event = asyncio.Event()
    events = await chat_service.stream_chat(request, cancel_event=cancel_event)

    async def event_generator() -> AsyncIterator[str]:
        try:
            async for event in events:
                if await http_request.is_disconnected():
                    logger.info(f"{__name__}:chat_stream - Client disconnected")
                    cancel_event.set()
                    break
                yield event.to_sse()
        finally:
            cancel_event.set()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
