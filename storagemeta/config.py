"""Configuration management for storagemeta."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGEMETA_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Hasura metadata API
    hasura_endpoint: str = "http://localhost:8080/v1"
    hasura_admin_secret: str = ""
    timeout: float = 10.0

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
