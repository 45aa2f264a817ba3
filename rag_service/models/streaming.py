"""
Streaming event schemas for chat.

Defines event types and payloads for incremental chat responses. A
stream opens with exactly one CONTEXT event, carries zero or more CHUNK
events and ends with exactly one of DONE or ERROR.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONTEXT = "context"
    CHUNK = "chunk"
    DONE = "done"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamEventType.DONE, StreamEventType.ERROR)


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def context(cls, texts: list[str]) -> "StreamEvent":
        return cls(event=StreamEventType.CONTEXT, data={"context": texts})

    @classmethod
    def chunk(cls, text: str) -> "StreamEvent":
        return cls(event=StreamEventType.CHUNK, data={"text": text})

    @classmethod
    def done(cls) -> "StreamEvent":
        return cls(event=StreamEventType.DONE)

    @classmethod
    def error(cls, message: str, code: int | None = None) -> "StreamEvent":
        data: dict[str, Any] = {"error": message}
        if code is not None:
            data["code"] = code
        return cls(event=StreamEventType.ERROR, data=data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"type": self.event.value, **self.data}

    def to_sse(self) -> str:
        """Format as a Server-Sent Events frame."""
        return f"event: {self.event.value}\ndata: {json.dumps(self.to_dict())}\n\n"
