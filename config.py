"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

Links embedded in magic-link and password-reset emails are built from
API_AUTH_HOST, so it must point at the public host of this service.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "accounts"


class JWTSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    jwt_issuer: str = "accounts"
    jwt_audience: str = "accounts.api"
    access_token_ttl_seconds: int = 900
    cookie_secure: bool = True

    # RS256 keys (preferred)
    jwt_private_key: str = ""
    jwt_public_key: str = ""

    # HS256 fallback (used when RS256 keys are absent)
    jwt_secret: str = ""

    @property
    def use_rs256(self) -> bool:
        return bool(self.jwt_private_key and self.jwt_public_key)


class EmailSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    zepto_api_token: str = ""
    zepto_from_email: str = "noreply@example.org"
    zepto_from_name: str = "Accounts"


class DirectorySettings(BaseSettings):
    """Public establishments directory used to resolve town hall emails."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    directory_api_url: str = "https://etablissements-publics.api.gouv.fr/v3"
    directory_timeout_seconds: float = 5.0


class EmailCheckSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Empty key disables the check (every address is considered safe)
    debounce_api_key: str = ""
    debounce_timeout_seconds: float = 3.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "accounts"
    api_auth_host: str = "http://localhost:8000"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    jwt: Optional[JWTSettings] = None
    email: Optional[EmailSettings] = None
    directory: Optional[DirectorySettings] = None
    email_check: Optional[EmailCheckSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Links are concatenated with paths, keep the host without a trailing slash
        self.api_auth_host = self.api_auth_host.rstrip("/")

        if self.db is None:
            self.db = DatabaseSettings()
        if self.jwt is None:
            self.jwt = JWTSettings()
        if self.email is None:
            self.email = EmailSettings()
        if self.directory is None:
            self.directory = DirectorySettings()
        if self.email_check is None:
            self.email_check = EmailCheckSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
