"""Application configuration management."""
from typing import List
from fastapi import Request
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "WriteSpace"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Database (in-memory by default, state lives for the process lifetime)
    database_url: str = "sqlite+aiosqlite:///:memory:"

    # JWT
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24

    # LLM Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout: float = 120.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was built with."""
    return request.app.state.settings
