"""
Configuration management for the Job Tracker API.
"""

from datetime import timedelta

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = "sqlite:///./jobs.db"

    # Token signing
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_lifetime: timedelta = timedelta(days=30)

    # Read-only demo account; empty means no account is restricted
    test_user_id: str = ""

    # Pagination
    default_page_limit: int = 10
    max_page_limit: int = 100

    # API
    auth_rate_limit: str = "10/15minutes"
    cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
