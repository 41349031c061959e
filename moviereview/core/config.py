# moviereview/core/config.py
from __future__ import annotations

"""
# MovieReview — Configuration

One `settings` object, read from the process environment and `.env`
(pydantic-settings; names are case-insensitive, unknown keys ignored).

Only `JWT_SECRET_KEY` is mandatory. The database is either assembled from the
`POSTGRES_*` parts or given whole as `SQLALCHEMY_DATABASE_URI` (any async
SQLAlchemy URL, e.g. `sqlite+aiosqlite:///./dev.db`).

    from moviereview.core.config import settings
"""

from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Typed runtime configuration. Auth cookies are `Secure` everywhere but development."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────
    PROJECT_NAME: str = "MovieReview API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Tokens & passwords ──────────────────────────────────
    JWT_SECRET_KEY: SecretStr = Field(..., description="HMAC key for access tokens")
    JWT_REFRESH_SECRET_KEY: Optional[SecretStr] = Field(
        None, description="HMAC key for refresh tokens; JWT_SECRET_KEY when unset"
    )
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, ge=5, le=1440)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(10, ge=1, le=365)
    BCRYPT_ROUNDS: int = Field(10, ge=4, le=16)

    ACCESS_TOKEN_COOKIE: str = "accessToken"
    REFRESH_TOKEN_COOKIE: str = "refreshToken"
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"

    # ── Database ────────────────────────────────────────────
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "moviereview"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    DB_ECHO: bool = False
    DB_POOL_SIZE: int = Field(10, ge=1)
    DB_MAX_OVERFLOW: int = Field(20, ge=0)
    DB_POOL_TIMEOUT: int = Field(30, ge=1, description="seconds")
    DB_POOL_RECYCLE: int = Field(1800, ge=-1, description="seconds; -1 disables")

    # ── HTTP ────────────────────────────────────────────────
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )

    # ── Reviews ─────────────────────────────────────────────
    # False: any authenticated user may edit/delete any review.
    REVIEW_OWNERSHIP_ENFORCED: bool = False

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def _origins_from_csv(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def _blank_uri_is_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    # ── Derived ─────────────────────────────────────────────
    @property
    def is_development(self) -> bool:
        return self.ENV == "development"

    @property
    def cookie_secure(self) -> bool:
        return not self.is_development

    @property
    def refresh_secret(self) -> str:
        return (self.JWT_REFRESH_SECRET_KEY or self.JWT_SECRET_KEY).get_secret_value()

    @property
    def DATABASE_URL(self) -> str:
        """Plain PostgreSQL DSN from the POSTGRES_* parts."""
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return (
            f"postgresql://{self.POSTGRES_USER}:{password}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """URL the async engine connects to; the explicit override wins."""
        return self.SQLALCHEMY_DATABASE_URI or self.DATABASE_URL.replace(
            "postgresql://", "postgresql+asyncpg://", 1
        )


settings = Settings()
