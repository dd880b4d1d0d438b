# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import AppConfig, AuthConfig, DatabaseConfig, MailConfig, load_config
from .auth import AuthSettings  # noqa: I001 (needs settings loaded first)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "AuthSettings",
    "DatabaseConfig",
    "MailConfig",
    "load_config",
]
