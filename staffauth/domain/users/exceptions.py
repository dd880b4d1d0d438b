# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.shared.errors.base import (
    ConflictError,
    UnauthorizedError,
    UnprocessableEntityError,
)


class EmailNotFoundError(UnprocessableEntityError):
    def __init__(self) -> None:
        super().__init__({"email": "notFound"})


class IncorrectPasswordError(UnprocessableEntityError):
    def __init__(self) -> None:
        super().__init__({"password": "incorrectPassword"})


class EmailNotExistsError(UnprocessableEntityError):
    def __init__(self) -> None:
        super().__init__({"email": "emailNotExists"})


class ResetHashNotFoundError(UnprocessableEntityError):
    def __init__(self) -> None:
        super().__init__({"hash": "notFound"})


class SessionNotFoundError(UnauthorizedError):
    def __init__(self, session_id: int | None = None) -> None:
        super().__init__(f"session {session_id} not found or revoked")
        self.session_id = session_id


class InvalidTokenError(UnauthorizedError):
    """Raised when a signed token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class UserAlreadyExistsError(ConflictError):
    def __init__(self, field: str | None = None) -> None:
        super().__init__(
            "user_already_exists",
            context={"field": field} if field else None,
        )
