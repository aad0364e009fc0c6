"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Inventory Manager"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
        if origin.strip()
    ]

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./inventory.db"
    )

    # Audit log
    AUDIT_PERFORMED_BY: str = os.getenv("AUDIT_PERFORMED_BY", "system")
    AUDIT_LOG_DEFAULT_LIMIT: int = int(os.getenv("AUDIT_LOG_DEFAULT_LIMIT", "100"))
    AUDIT_LOG_MAX_LIMIT: int = int(os.getenv("AUDIT_LOG_MAX_LIMIT", "1000"))

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls, so environment variables are read a
    single time per process.
    """
    return Settings()
