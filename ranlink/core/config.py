"""Configuration settings for the RAN link planner API."""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "RAN Link Budget Planner"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DIR: Optional[str] = None  # enables rotating file logs when set

    # External suggestion service (Gemini-compatible generateContent API)
    SUGGESTIONS_API_KEY: Optional[str] = None
    SUGGESTIONS_MODEL: str = "gemini-2.5-flash"
    SUGGESTIONS_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    SUGGESTIONS_TIMEOUT_S: float = 30.0
    SUGGESTIONS_MAX_RETRIES: int = 2

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    """Get application settings with dependency injection support."""
    return settings


# For use with FastAPI's Depends
get_settings_dep = lru_cache(get_settings)
