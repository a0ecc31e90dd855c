"""
Language model provider settings.

OpenAI credentials and model parameters for embeddings and chat completions.

Dependencies: pydantic, pydantic_settings
System role: Model provider configuration for the chat pipeline and ingestion
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from om2chat.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """OpenAI configuration (OPENAI_* environment variables)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENAI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="OpenAI API key (required)")
    base_url: str | None = Field(default=None, description="Optional API base URL override")

    model: str = Field(default="gpt-4o", description="Chat completion model")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model used for questions and chunks",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the chunk column)",
    )

    max_tokens: int = Field(default=1000, description="Maximum completion tokens")
    temperature: float = Field(default=0.7, description="Sampling temperature", ge=0.0, le=2.0)
