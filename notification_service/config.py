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
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret shared with the auth service to verify user JWTs",
        min_length=1,
    )
    jwt_algorithm: str = Field(default="HS256", description="Algorithm used to sign JWTs")
    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of development tokens issued by the helper script",
        gt=0,
    )
    service_api_key: str = Field(
        description="Shared secret expected in the x-api-key header of internal calls",
        min_length=1,
    )

    email_host: str | None = Field(default=None, description="SMTP server host")
    email_port: int = Field(default=587, description="SMTP server port", gt=0)
    email_user: str | None = Field(default=None, description="SMTP login user")
    email_pass: str | None = Field(default=None, description="SMTP login password")
    email_from: str | None = Field(
        default=None, description="Address used in the From header of status emails"
    )
    email_from_name: str = Field(
        default="Food Ordering System",
        description="Display name used in the From header of status emails",
    )
    email_timeout_seconds: float = Field(
        default=15, description="Socket timeout for the SMTP transport", gt=0
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key; when set, SendGrid is used instead of SMTP",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of SendGrid messages",
        min_length=3,
    )

    app_timezone: str = Field(default="UTC", description="Timezone used for timestamps")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    debug: bool = Field(
        default=False, description="Expose internal error details in 500 responses"
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable SendGrid"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def smtp_configured(self) -> bool:
        return bool(self.email_host and self.email_from)

    @property
    def sendgrid_configured(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
