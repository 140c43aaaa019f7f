"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=1440,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    password_reset_expire_minutes: int = Field(
        default=60,
        description="Number of minutes a password reset token stays valid",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    sendgrid_sender_name: str = Field(
        default="JusCRM",
        description="Display name used for the sender of transactional messages",
    )
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Base URL of the browser application, used to build email links",
    )
    cors_origins: list[str] | None = Field(
        default=None,
        description="Origins allowed by CORS; defaults to the frontend URL",
    )
    app_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone (or UTC offset) used for stored timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    def allowed_origins(self) -> list[str]:
        """Return the CORS origins, falling back to the frontend URL."""

        if self.cors_origins:
            return list(self.cors_origins)
        return [self.frontend_url.rstrip("/")]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
