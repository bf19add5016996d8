"""
Configuration Settings.

This module defines the server configuration using Pydantic's BaseSettings.
It loads all configuration from environment variables and the .env file
without explicit dotenv loading.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from historian.info_provider.openrouter import DEFAULT_BASE_URL, DEFAULT_MODEL

# =====================================================================
# Provider Configuration Models
# =====================================================================


class OpenRouterConfig(BaseModel):
    """OpenRouter API configuration.

    The credential gates the external update action: without it the action
    is not registered at all.
    """

    api_key: Optional[str] = Field(
        default=None, alias="OPENROUTER_API_KEY", description="OpenRouter API key for authentication"
    )
    model: str = Field(default=DEFAULT_MODEL, alias="OPENROUTER_MODEL", description="Model used for CSS update summaries")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="OPENROUTER_BASE_URL", description="OpenRouter API base URL")

    model_config = {"populate_by_name": True}

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


class KnowledgeStoreConfig(BaseModel):
    """Knowledge store file locations."""

    memory_file: Path = Field(
        default=Path("data/memory.json"), alias="HISTORIAN_MEMORY_FILE", description="Backing JSON file"
    )
    seed_file: Optional[Path] = Field(
        default=None, alias="HISTORIAN_SEED_FILE", description="Seed record read while the backing file is missing"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Server settings model.

    All properties are bound from environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server
    # =====================================================================
    server_name: str = Field(default="the-historian", alias="HISTORIAN_SERVER_NAME", description="MCP server name")
    server_version: str = Field(default="0.0.1", alias="HISTORIAN_SERVER_VERSION", description="MCP server version")

    # =====================================================================
    # Logging
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        alias="HISTORIAN_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(default="detailed", alias="HISTORIAN_LOG_FORMAT", description="simple, detailed or json")
    log_file_dir: str = Field(default="logs", alias="HISTORIAN_LOG_FILE_DIR", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, alias="HISTORIAN_ENABLE_FILE_LOGGING", description="Also write logs to a file"
    )

    # =====================================================================
    # Knowledge Store
    # =====================================================================
    memory_file: Path = Field(default=Path("data/memory.json"), alias="HISTORIAN_MEMORY_FILE")
    seed_file: Optional[Path] = Field(default=None, alias="HISTORIAN_SEED_FILE")

    # =====================================================================
    # OpenRouter
    # =====================================================================
    openrouter_api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    openrouter_model: str = Field(default=DEFAULT_MODEL, alias="OPENROUTER_MODEL")
    openrouter_base_url: str = Field(default=DEFAULT_BASE_URL, alias="OPENROUTER_BASE_URL")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def openrouter(self) -> OpenRouterConfig:
        """Get OpenRouter configuration from environment variables."""
        return OpenRouterConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def knowledge(self) -> KnowledgeStoreConfig:
        """Get knowledge store configuration from environment variables."""
        return KnowledgeStoreConfig.model_validate(self.model_dump(by_alias=True))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
