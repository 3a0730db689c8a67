"""
Environment configuration for the school records package.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from functools import lru_cache
from typing import List
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = Field(default="School Records")
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TIMEZONE: str = "UTC"

    # API configuration
    API_VERSION: str = "v1"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_JSON: bool = False
    LOG_TO_FILE: bool = False

    # Scheduled report execution
    EXECUTION_HISTORY_LIMIT: int = Field(default=50, ge=1)
    MAX_RETRY_ATTEMPTS: int = Field(default=3, ge=0)

    # Access control
    DEFAULT_MAX_RECORDS: int = Field(default=1000, ge=0)

    # Attendance thresholds (percent)
    CHRONIC_ABSENCE_THRESHOLD: float = Field(default=10.0, ge=0, le=100)
    LOW_ATTENDANCE_THRESHOLD: float = Field(default=90.0, ge=0, le=100)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
