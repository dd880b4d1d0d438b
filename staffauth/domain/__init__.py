# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, InvariantViolationError
from .users.entities import (
    AccessClaims,
    LoginResponse,
    NewUser,
    RefreshClaims,
    ResetPasswordRequest,
    Session,
    TokenPair,
    User,
    UserRole,
    UserStatus,
)

__all__ = [
    "AccessClaims",
    "InvariantViolation",
    "InvariantViolationError",
    "LoginResponse",
    "NewUser",
    "RefreshClaims",
    "ResetPasswordRequest",
    "Session",
    "TokenPair",
    "User",
    "UserRole",
    "UserStatus",
]
