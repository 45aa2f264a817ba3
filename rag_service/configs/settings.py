"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from rag_service.configs.base import BaseSettings
from rag_service.configs.embeddings import EmbeddingSettings
from rag_service.configs.providers import BedrockSettings, OllamaSettings, OpenRouterSettings
from rag_service.configs.rag import RAGSettings
from rag_service.configs.server import ServerSettings
from rag_service.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    server: ServerSettings = Field(default_factory=ServerSettings)
    openrouter: OpenRouterSettings = Field(default_factory=OpenRouterSettings)
    bedrock: BedrockSettings = Field(default_factory=BedrockSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    embeddings: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    rag: RAGSettings = Field(default_factory=RAGSettings)

    def api_key_for(self, provider: str) -> str:
        """
        Look up the configured credential for a provider.

        Args:
            provider: Provider name ('openrouter', 'bedrock', 'ollama')

        Returns:
            str: API key, or empty string when none is configured
        """
        keys = {
            "openrouter": self.openrouter.api_key,
            "bedrock": self.bedrock.api_key,
        }
        return keys.get(provider, "")


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from rag_service.configs import get_settings
        settings = get_settings()
    """
    return Settings()
