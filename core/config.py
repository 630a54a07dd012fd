"""
Configuration settings for Charity Finder Backend.

Uses Pydantic Settings for environment variable management.
"""

import os
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Environment
    ENV: str = Field(default="development", env="ENV")
    DEBUG: bool = Field(default=False, env="DEBUG")
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")

    # Logging Control
    ENABLE_FILE_LOGGING: bool = Field(default=False, env="ENABLE_FILE_LOGGING")
    ENABLE_REQUEST_LOGGING: bool = Field(default=False, env="ENABLE_REQUEST_LOGGING")
    LOG_DIR: str = Field(default="logs", env="LOG_DIR")

    # Application
    APP_NAME: str = Field(default="Charity Finder Backend", env="APP_NAME")
    VERSION: str = Field(default="1.0.0", env="VERSION")

    # Server
    HOST: str = Field(default="0.0.0.0", env="HOST")
    PORT: int = Field(default=8000, env="PORT")

    ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://localhost:5173",
    ]

    # Database (async driver required: aiosqlite or asyncpg)
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./charity_finder.db",
        env="DATABASE_URL"
    )
    DATABASE_ECHO: bool = Field(default=False, env="DATABASE_ECHO")

    # Google Places (v1)
    GOOGLE_PLACES_API_KEY: Optional[str] = Field(default=None, env="GOOGLE_PLACES_API_KEY")
    GOOGLE_PLACES_BASE_URL: str = Field(default="https://places.googleapis.com/v1", env="GOOGLE_PLACES_BASE_URL")
    GOOGLE_PLACES_TIMEOUT: float = Field(default=20.0, env="GOOGLE_PLACES_TIMEOUT")

    # Discover search
    SEARCH_MAX_RESULTS: int = Field(default=20, env="SEARCH_MAX_RESULTS")
    SEARCH_DEFAULT_RADIUS_KM: int = Field(default=2, env="SEARCH_DEFAULT_RADIUS_KM")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()


def get_env_file() -> str:
    """Get the appropriate environment file based on ENV setting."""
    env_file = f".env.{settings.ENV}"
    if os.path.exists(env_file):
        return env_file
    return ".env"


# Update settings with environment-specific file
settings = Settings(_env_file=get_env_file())
