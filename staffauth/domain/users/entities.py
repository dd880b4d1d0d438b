# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from staffauth.domain.exceptions import InvariantViolation


class UserStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: str | UserStatus) -> UserStatus:
        try:
            return cls(value)
        except ValueError:
            raise InvariantViolation(f"unknown status {value!r}", field="status") from None


class UserRole(StrEnum):
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    TRAINER = "trainer"

    @classmethod
    def parse(cls, value: str | UserRole) -> UserRole:
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvariantViolation(f"unknown role {value!r}", field="role") from None


@dataclass(slots=True)
class User:
    """Staff account.

    ``password`` holds the stored hash once loaded. Assigning plaintext to it
    marks the password as changed; the persistence adapter hashes it before
    writing (see :meth:`password_changed`). ``previous_password`` is the
    snapshot taken when the record was loaded.
    """

    id: int
    username: str
    email: str | None
    password: str | None
    status: UserStatus = UserStatus.INACTIVE
    role: UserRole = UserRole.STAFF
    full_name: str | None = None
    phone_number: str | None = None
    salary: float | None = None
    hash: str | None = field(default=None, repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    previous_password: str | None = field(default=None, repr=False, compare=False)

    def snapshot_password(self) -> None:
        self.previous_password = self.password

    def password_changed(self) -> bool:
        return bool(self.password) and self.password != self.previous_password

    def set_password(self, plaintext: str) -> None:
        if not plaintext:
            raise InvariantViolation("password cannot be empty", field="password")
        self.password = plaintext

    @property
    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "fullName": self.full_name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "salary": self.salary,
            "status": self.status.value,
            "role": self.role.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(slots=True, frozen=True)
class NewUser:
    username: str
    email: str | None
    password: str
    role: UserRole
    full_name: str | None = None
    status: UserStatus = UserStatus.INACTIVE
    hash: str | None = field(default=None, repr=False)


@dataclass(slots=True, frozen=True)
class Session:

    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(slots=True, frozen=True)
class ResetPasswordRequest:

    id: int
    hash: str = field(repr=False)
    user: User
    created_at: datetime
    deleted_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class TokenPair:

    token: str
    refresh_token: str
    token_expires: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "refreshToken": self.refresh_token,
            "tokenExpires": self.token_expires,
        }


@dataclass(slots=True, frozen=True)
class LoginResponse:

    tokens: TokenPair
    user: User

    def to_dict(self) -> dict[str, Any]:
        return {**self.tokens.to_dict(), "user": self.user.to_public_dict()}


@dataclass(slots=True, frozen=True)
class AccessClaims:

    id: int
    session_id: int


@dataclass(slots=True, frozen=True)
class RefreshClaims:

    session_id: int
