"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    # Pre-populate the in-memory store with a handful of sample bookmarks on startup
    seed_sample_data: bool = Field(default=True, validation_alias="SEED_SAMPLE_DATA")

    # Field limits - the client controller validates against the same values
    max_title_length: int = Field(default=200, validation_alias="MAX_TITLE_LENGTH")
    max_description_length: int = Field(
        default=500, validation_alias="MAX_DESCRIPTION_LENGTH",
    )
    max_tags: int = Field(default=5, validation_alias="MAX_TAGS")

    # Title auto-fill
    metadata_fetch_timeout: float = Field(
        default=5.0, validation_alias="METADATA_FETCH_TIMEOUT",
    )

    # Rate limiting on /bookmarks routes (fixed window, per client address)
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    rate_limit_max_requests: int = Field(
        default=100, validation_alias="RATE_LIMIT_MAX_REQUESTS",
    )
    rate_limit_window_seconds: int = Field(
        default=15 * 60, validation_alias="RATE_LIMIT_WINDOW_SECONDS",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
