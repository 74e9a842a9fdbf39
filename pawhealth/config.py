"""
Application Configuration — Pydantic Settings

Centralized configuration management using environment variables.
Loads from .env file automatically with sensible defaults.
"""

from dateutil import tz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Priority: Environment variables > .env file > defaults
    """
    
    # === API Configuration ===
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "PawHealth"
    
    # === CORS Configuration ===
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
        "capacitor://localhost",
    ]
    
    # === Health Status ===
    # Trailing window of appointments handed to the evaluator
    APPOINTMENT_LOOKBACK_MONTHS: int = 6
    # IANA zone whose calendar date is "today" for evaluations
    TIMEZONE: str = "UTC"
    
    # === Environment ===
    ENVIRONMENT: str = "local"  # local, development, staging, production
    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = False
    
    # === Settings Configuration ===
    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if tz.gettz(v) is None:
            raise ValueError(f"Unknown timezone '{v}'")
        return v


# Singleton instance
settings = Settings()
