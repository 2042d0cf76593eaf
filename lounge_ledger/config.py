"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Lounge Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./lounge_ledger.db"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Accounting
    # Automated postings (sync, order/stock hooks) are attributed to this user.
    SYSTEM_ACTOR_ID: int = int(os.getenv("SYSTEM_ACTOR_ID", "1"))
    BALANCE_TOLERANCE: Decimal = Decimal(os.getenv("BALANCE_TOLERANCE", "0.01"))
    SYNC_MOVEMENT_LIMIT: int = int(os.getenv("SYNC_MOVEMENT_LIMIT", "1000"))


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
