"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./stridelab.db"

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # text or json

    # Frontend URL for CORS
    FRONTEND_URL: str = "http://localhost:3000"

    # Training load model
    TRAINING_WINDOW_DAYS: int = 60
    ACUTE_TIME_CONSTANT: int = 7    # Days for Acute Training Load
    CHRONIC_TIME_CONSTANT: int = 42  # Days for Chronic Training Load

    # Banister TRIMP
    GENDER_FACTOR_MALE: float = 1.92
    GENDER_FACTOR_FEMALE: float = 1.67
    DEFAULT_MAX_HEART_RATE: int = 190
    DEFAULT_RESTING_HEART_RATE: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create a global settings instance for direct import
settings = get_settings()
