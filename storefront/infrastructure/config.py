"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Storage: "memory" keeps documents in process, "database" uses PostgreSQL
    storage_backend: str = "memory"
    database_url: str = "postgresql+asyncpg://storefront:storefront_dev_password@db:5432/storefront"

    # Authentication (admin write path only, reads are public)
    catalog_api_key: str = "dev-api-key-change-in-production"

    # CORS
    cors_origins: list[str] = ["*"]

    # Public catalog queries
    query_depth: int = 2
    query_limit: int = 1000
    query_sort: str = "-createdAt"

    # Media uploads (enforced by the upload pipeline, referenced here)
    media_mime_types: list[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
        "video/mp4",
        "video/MOV",
        "video/webm",
        "video/ogg",
    ]
    media_static_dir: str | None = None
    media_format: str = "webp"
    media_quality: int = 80

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
