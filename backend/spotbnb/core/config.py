# backend/spotbnb/core/config.py
import logging
import os
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_BACKEND_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug("[CONFIG] Looking for .env at: %s (exists=%s)", env_path, env_path.exists())
    load_dotenv(env_path)

_DEFAULT_SECRET_KEY = SecretStr("spotbnb-development-secret-key-change-me")


class Settings(BaseSettings):
    environment: Literal["development", "test", "production"] = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Deployment environment name",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database
    database_url: str = Field(
        default=f"sqlite:///{_BACKEND_ROOT / 'spotbnb.db'}",
        alias="DATABASE_URL",
        description="SQLAlchemy database URL",
    )
    auto_create_tables: bool = Field(
        default=True,
        alias="AUTO_CREATE_TABLES",
        description="Create tables from model metadata on startup",
    )

    # Auth / sessions
    secret_key: SecretStr = Field(
        default=_DEFAULT_SECRET_KEY,
        alias="SECRET_KEY",
        description="Secret key for signing session tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    session_cookie_name: str = Field(
        default="token",
        alias="SESSION_COOKIE_NAME",
        description="Session cookie name",
    )
    session_cookie_secure: bool = Field(
        default=False,
        alias="SESSION_COOKIE_SECURE",
        description="Whether session cookies must be marked Secure",
    )
    session_cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax",
        alias="SESSION_COOKIE_SAMESITE",
        description="SameSite attribute applied to session cookies",
    )

    # Booking lock (optional Redis)
    redis_url: Optional[str] = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis URL for the distributed per-spot booking lock (disabled when unset)",
    )
    redis_namespace: str = Field(default="spotbnb", alias="REDIS_NAMESPACE")
    booking_lock_ttl_seconds: int = Field(default=30, alias="BOOKING_LOCK_TTL_SECONDS", ge=1)
    booking_lock_wait_seconds: float = Field(
        default=5.0,
        alias="BOOKING_LOCK_WAIT_SECONDS",
        gt=0,
        description="How long a booking write waits for another write on the same spot in this process",
    )

    # HTTP
    cors_origins_raw: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("redis_url", mode="before")
    @classmethod
    def _blank_redis_url(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins_raw.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_database_url(self) -> str:
        return self.database_url


settings = Settings()

if settings.is_production and settings.secret_key == _DEFAULT_SECRET_KEY:
    raise RuntimeError("Refusing to start: SECRET_KEY must be set in production")
