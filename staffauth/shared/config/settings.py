# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_NESTED_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///staffauth.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _NESTED_CONFIG


class AuthConfig(BaseSettings):
    # Optional at load time; AuthSettings.from_config decides what is fatal.
    secret: str | None = Field(None, alias="AUTH_JWT_SECRET")
    expires: str | None = Field(None, alias="AUTH_JWT_TOKEN_EXPIRES_IN")
    refresh_secret: str | None = Field(None, alias="AUTH_REFRESH_SECRET")
    refresh_expires: str | None = Field(None, alias="AUTH_REFRESH_TOKEN_EXPIRES_IN")

    model_config = _NESTED_CONFIG


class MailConfig(BaseSettings):
    smtp_host: str | None = Field(None, alias="SMTP_HOST")
    smtp_port: int = Field(587, ge=1, alias="SMTP_PORT")
    smtp_user: str | None = Field(None, alias="SMTP_USER")
    smtp_password: str | None = Field(None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(True, alias="SMTP_USE_TLS")
    default_email: str | None = Field(None, alias="MAIL_DEFAULT_EMAIL")
    default_name: str = Field("Staff Desk", alias="MAIL_DEFAULT_NAME")

    model_config = _NESTED_CONFIG

    @field_validator("smtp_use_tls", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _mail_config_factory() -> MailConfig:
    return MailConfig()  # type: ignore[call-arg]


_WEAK_SECRETS = ("secret", "dev", "development", "test", "change-me", "")


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    frontend_domain: str = Field("http://localhost:3000", alias="FRONTEND_DOMAIN")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    mail: MailConfig = Field(default_factory=_mail_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("frontend_domain", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        weak = [
            name
            for name, value in (
                ("AUTH_JWT_SECRET", self.auth.secret),
                ("AUTH_REFRESH_SECRET", self.auth.refresh_secret),
            )
            if value is not None and value in _WEAK_SECRETS
        ]
        if weak:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure signing secret detected in production!\n"
                f"   {', '.join(weak)} must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.auth.secret and self.auth.secret == self.auth.refresh_secret:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: access and refresh tokens share one secret.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "MailConfig", "load_config"]
