# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from staffauth.shared.errors.base import ConfigurationError
from staffauth.shared.utils.durations import parse_duration

from .settings import AuthConfig

_REQUIRED = (
    ("secret", "AUTH_JWT_SECRET"),
    ("expires", "AUTH_JWT_TOKEN_EXPIRES_IN"),
    ("refresh_secret", "AUTH_REFRESH_SECRET"),
    ("refresh_expires", "AUTH_REFRESH_TOKEN_EXPIRES_IN"),
)


@dataclass(slots=True, frozen=True)
class AuthSettings:
    """Signing secrets and lifetimes resolved once at startup."""

    secret: str
    expires: timedelta
    refresh_secret: str
    refresh_expires: timedelta

    @classmethod
    def from_config(cls, config: AuthConfig) -> AuthSettings:
        missing = [env for attr, env in _REQUIRED if not getattr(config, attr)]
        if missing:
            raise ConfigurationError(missing)

        try:
            expires = parse_duration(config.expires)  # type: ignore[arg-type]
            refresh_expires = parse_duration(config.refresh_expires)  # type: ignore[arg-type]
        except ValueError as exc:
            raise ConfigurationError(detail=str(exc)) from exc

        return cls(
            secret=config.secret,  # type: ignore[arg-type]
            expires=expires,
            refresh_secret=config.refresh_secret,  # type: ignore[arg-type]
            refresh_expires=refresh_expires,
        )
