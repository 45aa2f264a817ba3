"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(description="User question or message")
    provider: str = Field(description="Generation backend: 'openrouter' or 'bedrock'")
    model: str | None = Field(default=None, description="Model override for this request")
    system_prompt: str | None = Field(default=None, description="System prompt override")


class TokenMetrics(BaseModel):
    """Approximate token usage for a chat exchange."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    message: str
    context: list[str] = Field(default_factory=list)
    token_metrics: TokenMetrics = Field(default_factory=TokenMetrics)
