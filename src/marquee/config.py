"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # TMDb API
    tmdb_api_key: str = ""
    tmdb_language: str = "en-US"
    tmdb_poster_size: str = "w500"
    tmdb_backdrop_size: str = "w1280"
    tmdb_max_concurrency: int = 4

    # Listing source
    listing_url: str = "https://www.cinecenta.com/calendar/"
    listing_timezone: str = "America/Vancouver"
    http_timeout: int = 30

    # Bump to discard every cached enrichment result
    cache_version: int = 1

    # API settings
    cors_origins: list[str] = ["http://localhost:5173"]
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global settings instance
settings = Settings()
