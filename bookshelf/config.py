"""Application configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Bookshelf API"
    debug: bool = False
    metrics_enabled: bool = True

    # Store (Redis)
    redis_url: str = "redis://localhost:6379/0"
    store_prefix: str = "bookshelf"

    # Auth
    auth_required: bool = True
    admin_username: str = "admin"
    admin_password: str = "password"
    session_secret: str = "change-me-in-production"
    session_ttl: int = 86400  # 1 day
    cookie_secure: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
