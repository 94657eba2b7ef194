from __future__ import annotations

from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """
    App settings.

    Loads from environment variables and an optional local `.env` file.
    `.env` is gitignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    API_TITLE: str = "Portfolio API"
    API_VERSION: str = "0.1.0"
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    # Database (single embedded SQLite file)
    PORTFOLIO_DB_PATH: str = "data/portfolio.db"
    PORTFOLIO_DB_ECHO: bool = False

    # Auth (HTTP-only cookie session, or Authorization: Bearer)
    AUTH_COOKIE_NAME: str = "session_token"
    AUTH_COOKIE_SECURE: bool = False
    AUTH_COOKIE_SAMESITE: str = "lax"  # lax|strict|none

    # Session lifecycle
    AUTH_VERIFICATION_TTL_MINUTES: int = 15
    AUTH_SESSION_TTL_DAYS: int = 30
    AUTH_RENEWAL_THRESHOLD_MINUTES: int = 60
    AUTH_RENEWAL_EXTENSION_HOURS: int = 24
    AUTH_SWEEP_INTERVAL_MINUTES: int = 60

    # Magic links point at the admin frontend.
    SITE_URL: str = "http://localhost:3000"

    # Seeded as admin on startup while no admin exists.
    ADMIN_EMAIL: str = ""

    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"


settings = Settings()
