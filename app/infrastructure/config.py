"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Persistence
    catalog_backend: str = "memory"  # "memory" or "sql"
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/catalog"

    # Object storage
    cloudinary_cloud_name: str = "demo"
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_base_url: str = "https://api.cloudinary.com"
    cloudinary_folder: str | None = None

    # Uploads
    upload_concurrency: int = 2
    upload_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
