# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# Reads the storefront's settings (database address, token secret, email provider, page sizes)
# from environment variables or a .env file, and rejects values that make no sense.
#
# 🧪 Purpose (Technical Summary):
# pydantic-settings model for every runtime parameter, validated on load and cached
# process-wide through get_settings().
#
# 🔗 Dependencies:
# - pydantic-settings (python-dotenv backs the .env loading)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - app.shared.infrastructure.database (engine URL and pool)
# - app.shared.core.security (JWT and bcrypt parameters)
# - app.modules.notifications (mail provider)
# - migrations/env.py

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "test", "staging", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")
JWT_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """
    Storefront settings.

    Names match the environment variables exactly; unknown variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION
    # =========================================================================

    APP_NAME: str = Field(default="Storefront API")
    APP_VERSION: str = Field(default="1.0.0")
    APP_DESCRIPTION: str = Field(default="E-commerce backend: users, carts and account lifecycle")
    ENVIRONMENT: str = Field(default="development", description=f"One of {', '.join(ENVIRONMENTS)}")
    DEBUG: bool = Field(default=False, description="Expose docs and debug error details")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text", description="text or json")

    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    RELOAD: bool = Field(default=False, description="uvicorn auto-reload")
    CORS_ORIGINS: str = Field(default="http://localhost:3000", description="Comma-separated origins")

    # =========================================================================
    # DATABASE
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="Full async URL; when unset one is built from the DB_* parts for asyncpg",
    )
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_NAME: str = Field(default="storefront")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="")
    DB_ECHO: bool = Field(default=False, description="Log every SQL statement")

    DB_POOL_SIZE: int = Field(default=10, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0)
    DB_POOL_TIMEOUT: int = Field(default=30, ge=1, description="Seconds to wait for a pooled connection")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Seconds before a connection is replaced")

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(default="development-secret-change-me")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24, ge=1, description="Session token lifetime")
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # =========================================================================
    # MAIL PROVIDER
    # =========================================================================

    MAIL_API_URL: Optional[str] = Field(default=None, description="HTTP mail provider endpoint")
    MAIL_API_KEY: Optional[str] = Field(default=None, description="Bearer key for the provider")
    MAIL_FROM: str = Field(default="no-reply@storefront.local")
    MAIL_TIMEOUT_SECONDS: int = Field(default=10, ge=1)
    MAIL_RETRY_ATTEMPTS: int = Field(default=2, ge=1, description="First try plus retries")

    # =========================================================================
    # PAGINATION
    # =========================================================================

    DEFAULT_PAGE_LIMIT: int = Field(default=10, ge=1)
    MAX_PAGE_LIMIT: int = Field(default=100, ge=1)

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT", "LOG_FORMAT")
    @classmethod
    def validate_lower_choice(cls, v: str, info: ValidationInfo) -> str:
        choices = ENVIRONMENTS if info.field_name == "ENVIRONMENT" else LOG_FORMATS
        if v.lower() not in choices:
            raise ValueError(f"{info.field_name} must be one of {list(choices)}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}")
        return v.upper()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only shared-secret algorithms; there is no key pair to sign with."""
        if v not in JWT_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {list(JWT_ALGORITHMS)}")
        return v

    # =========================================================================
    # DERIVED VALUES
    # =========================================================================

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def mail_enabled(self) -> bool:
        """The provider is used only when both its URL and key are set."""
        return bool(self.MAIL_API_URL and self.MAIL_API_KEY)


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
