# feedback_api/core/config.py
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = ROOT_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "Feedback Collection API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # JWT
    JWT_SECRET: str = "feedback-dev-secret-change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 24 * 60
    JWT_LEEWAY_SECONDS: int = 5

    # Passwords
    BCRYPT_ROUNDS: int = 10

    # DB URLs (either key is accepted)
    DATABASE_URL: str | None = None
    SQLALCHEMY_DATABASE_URI: str | None = None
    AUTO_CREATE_SCHEMA: bool = False

    @property
    def db_url(self) -> str:
        """
        Unified SQLAlchemy URL. Accepts DATABASE_URL or SQLALCHEMY_DATABASE_URI,
        falls back to a local SQLite file for development.
        """
        url = (self.DATABASE_URL or self.SQLALCHEMY_DATABASE_URI or "").strip()
        if not url:
            return "sqlite:///./feedback.db"
        if ("supabase.co" in url or "supabase.com" in url) and "sslmode=" not in url:
            sep = "&" if "?" in url else "?"
            url = f"{url}{sep}sslmode=require"
        return url

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() in ("prod", "production")


def mask_url(url: str) -> str:
    """Masks the password of a DB URL so it can be logged."""
    return re.sub(r"://([^:/@]+):([^@]+)@", r"://\1:***@", url)


@lru_cache
def get_settings() -> Settings:
    return Settings()
