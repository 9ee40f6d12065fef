"""Environment-based library settings. Read-only; no business logic."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from DOCMAPPER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCMAPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Section of the settings document to load")
    settings_file: str = Field(default="docmapper.json", description="Path to the JSON settings document")
    log_level: str = Field(default="INFO", description="Log level name")

    # MongoDB (see config/storage/mongo for connection request semantics)
    mongo_host: str = Field(default="localhost", description="Default host for master and slaves")
    mongo_port: int = Field(default=27017, ge=1, le=65535, description="Default port for master and slaves")
    mongo_connect_timeout_ms: int = Field(default=5000, ge=100, description="Connection timeout (ms)")
    mongo_server_selection_timeout_ms: int = Field(
        default=5000, ge=100, description="Server selection timeout (ms)"
    )
    min_server_version: str = Field(default="1.6.0", description="Oldest supported MongoDB server version")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for process lifetime."""
    return Settings()
