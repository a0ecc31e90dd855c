"""
Retrieval and ingestion settings.

Dependencies: pydantic, pydantic_settings
System role: Similarity search, context window and chunking configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from om2chat.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Similarity search and context assembly configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=5, description="Number of chunks to retrieve", ge=1, le=100)
    max_context_chars: int = Field(
        default=24000,
        description="Upper bound on assembled context length in characters",
        ge=1,
    )
    context_separator: str = Field(
        default="\n---\n",
        description="Separator placed between retrieved chunks",
    )


class IngestionSettings(BaseSettings):
    """Document ingestion (chunking) configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    max_chunk_size: int = Field(
        default=1000,
        description="Maximum characters per chunk",
        ge=1,
    )
    source: str = Field(default="pdf", description="Source tag stored in chunk metadata")
