"""Application settings using Pydantic Settings for typed configuration.

Process-level configuration (database, admin panel, email, CORS) comes from
environment variables. Wiki-level configuration that admins change at runtime
lives in the ``configs`` table and is read through ``ConfigManager``; the
``APP_SITE_URL``/``USER_UPPER_LIMIT`` variables below act as its env fallback.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # Database
    database_url: str = Field(alias="DATABASE_URL")

    # Admin panel
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")
    admin_username: str = Field(alias="ADMIN_USERNAME")
    admin_password: str = Field(alias="ADMIN_PASSWORD")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    app_title: str = Field(default="GROWI", alias="APP_TITLE")

    # Firebase (auth provider); falls back to GOOGLE_APPLICATION_CREDENTIALS
    firebase_credentials: str | None = Field(
        default=None, alias="FIREBASE_CREDENTIALS"
    )

    # Env-var sources for wiki configs
    app_site_url: str | None = Field(default=None, alias="APP_SITE_URL")
    user_upper_limit: int | None = Field(
        default=None, alias="USER_UPPER_LIMIT", ge=1
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def is_secure_cookie(self) -> bool:
        """Determine if cookies should be set with Secure flag."""
        return self.env_name.lower() not in {"dev", "development", "local"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
