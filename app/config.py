"""
ClearVision – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──
    APP_NAME: str = "ClearVision"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ── Organisation ──
    ORG_NAME: str = "ClearVision Foundation"
    FOUNDER_USER_ID: str = ""
    TASK_DUE_DAYS: int = 7

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./clearvision.db"
    # Serve the seeded in-memory demo store instead of DATABASE_URL
    USE_DEMO_STORE: bool = False

    # ── JWT ──
    SECRET_KEY: str = "change-me-to-a-random-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ── Google OAuth ──
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""

    # ── Gemini text generation ──
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_TIMEOUT_SECONDS: Optional[float] = 30.0


settings = Settings()
