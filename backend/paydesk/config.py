"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "PayDesk Payments API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'paydesk.db'}"

    # --- Access Control ---
    # Principals allowed to manage the payment provider configuration
    ADMIN_PRINCIPALS: list[str] = []

    # --- Identity Masking ---
    MASK_PREFIX: int = 4
    MASK_SUFFIX: int = 4
    MASK_CHAR: str = "*"

    # --- Payment Provider ---
    PROVIDER_TIMEOUT_SECONDS: float = 20.0
    PROVIDER_WORKERS: int = 4
    CHECKOUT_RATE_LIMIT: int = 10
    CHECKOUT_RATE_WINDOW: int = 60

    # --- Security ---
    CORS_ORIGINS: list[str] = ["*"]

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
