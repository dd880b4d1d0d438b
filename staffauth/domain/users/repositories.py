# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .entities import NewUser, ResetPasswordRequest, Session, TokenPair, User


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def create(self, new_user: NewUser) -> User: ...
    def save(self, user: User) -> User: ...


class SessionRepository(Protocol):
    def create(self, user: User) -> Session: ...
    def find_by_id(self, session_id: int) -> Session | None: ...
    def soft_delete(self, session_id: int) -> None: ...
    def soft_delete_for_user(self, user_id: int) -> None: ...


class ResetPasswordRepository(Protocol):
    def create(self, hash: str, user: User) -> ResetPasswordRequest: ...
    def find_by_hash(self, hash: str) -> ResetPasswordRequest | None: ...
    def soft_delete(self, request_id: int) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str | None) -> bool: ...


class TokenIssuer(Protocol):
    def issue(
        self, user_id: int, session_id: int, now: datetime | None = None
    ) -> TokenPair: ...


@dataclass(slots=True, frozen=True)
class MailData:
    to: str
    hash: str


class MailSender(Protocol):
    def confirm_register_user(self, mail: MailData) -> None: ...
    def forgot_password(self, mail: MailData) -> None: ...
