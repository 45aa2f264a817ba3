"""
Embedding configuration settings.

Selects the single active embedding backend and its model. Provider,
model and dimension are fixed for the lifetime of a vector index:
changing any of them invalidates the stored vectors.

Dependencies: pydantic, pydantic_settings
System role: Embedding backend selection
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingProviderName(str, Enum):
    """Closed set of supported embedding backends."""

    OLLAMA = "ollama"
    OPENROUTER = "openrouter"
    BEDROCK = "bedrock"


class EmbeddingSettings(BaseSettings):
    """Embedding backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: EmbeddingProviderName = Field(
        default=EmbeddingProviderName.OLLAMA,
        description="Embedding backend: 'ollama', 'openrouter' or 'bedrock'",
    )
    model: str = Field(default="all-minilm:33m", description="Embedding model identifier")
    dimensions: int = Field(
        default=384,
        gt=0,
        description="Expected embedding vector dimension for provider/model",
    )

    @property
    def requires_api_key(self) -> bool:
        """Whether the selected backend needs a credential."""
        return self.provider != EmbeddingProviderName.OLLAMA
