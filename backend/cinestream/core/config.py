"""
Application configuration settings
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Core Settings
    PROJECT_NAME: str = "CineStream"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # API Settings
    API_V1_STR: str = "/api/v1"
    BACKEND_CORS_ORIGINS: List[str] = []

    # Database
    DATABASE_URL: str = "sqlite:///./cinestream.db"

    # Review aggregation
    UPSERT_MAX_RETRIES: int = 1

    # Analytics
    RECENT_WINDOW_DAYS: int = 30
    TREND_MONTHS: int = 6
    TOP_REVIEWERS_LIMIT: int = 5
    SENTIMENT_BACKEND: str = "keyword"  # "keyword" or "textblob"

    # Report
    REPORT_SAMPLE_SIZE: int = 10
    COMMENT_PREVIEW_LENGTH: int = 50

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def validate_database_url(cls, v):
        if not v or not v.startswith(("postgresql", "sqlite")):
            raise ValueError("DATABASE_URL must be a valid PostgreSQL or SQLite URL")
        return v

    @field_validator("SENTIMENT_BACKEND", mode="before")
    @classmethod
    def validate_sentiment_backend(cls, v):
        if v not in ("keyword", "textblob"):
            raise ValueError("SENTIMENT_BACKEND must be 'keyword' or 'textblob'")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
