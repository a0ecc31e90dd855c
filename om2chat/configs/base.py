"""
Base configuration settings.

Every settings class reads the process environment and an optional .env
file. Application-wide fields (environment, log level, HTTP server and CORS)
live here; each subclass adds its own env prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


class BaseSettings(PydanticBaseSettings):
    """Shared settings (unprefixed variables such as LOG_LEVEL, API_PORT)."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    api_host: str = Field(default="0.0.0.0", description="uvicorn bind address")
    api_port: int = Field(default=8000, description="uvicorn port")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API (JSON list in the environment)",
    )
