"""
RAG pipeline configuration settings.

Chunking geometry, retrieval depth, default system prompt and the
timeout applied to outbound provider calls.

Dependencies: pydantic, pydantic_settings
System role: Retrieval and chunking configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer questions based on the provided context."
)


class RAGSettings(BaseSettings):
    """Chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    max_context_chunks: int = Field(
        default=5,
        alias="MAX_CONTEXT_CHUNKS",
        description="Number of fragments retrieved per query (top-K)",
    )
    chunk_size: int = Field(
        default=1000,
        alias="CHUNK_SIZE",
        description="Fragment window length in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        alias="CHUNK_OVERLAP",
        description="Characters shared by consecutive fragments",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        alias="SYSTEM_PROMPT",
        description="Configured default system prompt",
    )
    http_timeout_seconds: float = Field(
        default=120.0,
        alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout for embedding and generation backend calls",
    )

    @model_validator(mode="after")
    def validate_geometry(self) -> "RAGSettings":
        """
        Reject chunk and retrieval settings that cannot work.

        Raises:
            ValueError: When size, overlap or top-K are out of range
        """
        if self.chunk_size <= 0:
            raise ValueError("CHUNK_SIZE must be greater than 0")
        if self.chunk_overlap < 0 or self.chunk_overlap >= self.chunk_size:
            raise ValueError("CHUNK_OVERLAP must be between 0 and CHUNK_SIZE")
        if self.max_context_chunks <= 0:
            raise ValueError("MAX_CONTEXT_CHUNKS must be greater than 0")
        return self
