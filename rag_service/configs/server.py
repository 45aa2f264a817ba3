"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: uvicorn bind address and CORS configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Server bind and CORS configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SERVER_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=3000, description="Bind port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
