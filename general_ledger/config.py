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


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "General Ledger Core"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = _env_bool("DEBUG")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/general_ledger"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "console")

    # Posting
    # Only storage conflicts are retried. Validation and policy
    # failures are returned to the caller immediately.
    POSTING_MAX_RETRIES: int = int(os.getenv("POSTING_MAX_RETRIES", "3"))
    POSTING_RETRY_BACKOFF_SECONDS: float = float(
        os.getenv("POSTING_RETRY_BACKOFF_SECONDS", "0.05")
    )
    ALLOW_POSTING_OUTSIDE_PERIODS: bool = _env_bool(
        "ALLOW_POSTING_OUTSIDE_PERIODS"
    )
    DOCUMENT_NUMBER_PREFIX: str = os.getenv("DOCUMENT_NUMBER_PREFIX", "JE-")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
