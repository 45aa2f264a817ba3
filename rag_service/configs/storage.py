"""
Storage path configuration.

Local directories for original uploads, the vector index snapshot and
document metadata.

Dependencies: pydantic, pydantic_settings
System role: Filesystem layout configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Filesystem locations used by the service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    upload_dir: str = Field(
        default="./data/uploads",
        alias="UPLOAD_DIR",
        description="Directory for original uploaded files",
    )
    vector_store_path: str = Field(
        default="./data/vectors",
        alias="VECTOR_STORE_PATH",
        description="Directory holding the vector index snapshot",
    )
    metadata_store_path: str = Field(
        default="./data/metadata",
        alias="METADATA_STORE_PATH",
        description="Directory holding document metadata",
    )
