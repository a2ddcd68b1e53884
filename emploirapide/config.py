"""
Configuration management for EmploiRapide.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = "sqlite:///./emploirapide.db"

    # JWT Authentication
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # External job search (JSearch on RapidAPI)
    rapidapi_key: str = ""
    jsearch_url: str = "https://jsearch.p.rapidapi.com/search"
    jsearch_host: str = "jsearch.p.rapidapi.com"
    search_timeout: float = 30.0
    search_rate_limit: str = "30/minute"

    # File storage
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_dir: str = "./uploads"
    public_base_url: str = "http://localhost:8000"

    # Application
    app_name: str = "EmploiRapide"
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def jsearch_enabled(self) -> bool:
        return bool(self.rapidapi_key) and self.rapidapi_key != "your-rapidapi-key-here"

    @property
    def cloudinary_enabled(self) -> bool:
        return all((self.cloudinary_cloud_name, self.cloudinary_api_key, self.cloudinary_api_secret))


@lru_cache
def get_settings() -> Settings:
    """FastAPI dependency returning the process settings."""
    return Settings()
