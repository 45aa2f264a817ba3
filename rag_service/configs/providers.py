"""
Generation and embedding backend configuration.

Connection settings for the OpenRouter, AWS Bedrock and Ollama backends.
API keys are plain strings handed to the core per request; nothing here
persists them.

Dependencies: pydantic, pydantic_settings
System role: Provider endpoint and credential configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenRouterSettings(BaseSettings):
    """OpenRouter API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENROUTER_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="OpenRouter API key")
    model: str = Field(
        default="anthropic/claude-3.5-sonnet",
        description="Default chat model when a request does not override it",
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter API base URL",
    )
    app_url: str = Field(
        default="https://github.com/mrkaynak/rag",
        description="Value sent as HTTP-Referer for OpenRouter attribution",
    )
    app_title: str = Field(
        default="Enterprise RAG System",
        description="Value sent as X-Title for OpenRouter attribution",
    )


class BedrockSettings(BaseSettings):
    """AWS Bedrock runtime configuration (API-key bearer auth)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BEDROCK_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Bedrock API key")
    region: str = Field(default="eu-north-1", description="AWS region for Bedrock runtime")
    model_id: str = Field(
        default="openai.gpt-oss-20b-1:0",
        description="Default Bedrock model ID when a request does not override it",
    )

    @property
    def runtime_url(self) -> str:
        """
        Construct the Bedrock runtime base URL for the configured region.

        Returns:
            str: Regional bedrock-runtime endpoint
        """
        return f"https://bedrock-runtime.{self.region}.amazonaws.com"


class OllamaSettings(BaseSettings):
    """Local Ollama inference service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OLLAMA_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:11434",
        description="Ollama server base URL",
    )
