# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from staffauth.application.services.opaque_hash import generate_opaque_hash
from staffauth.domain.users.entities import NewUser, UserRole, UserStatus
from staffauth.domain.users.repositories import MailData, MailSender, UserRepository
from staffauth.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegisterUserInput:
    email: str
    username: str
    password: str
    full_name: str
    role: UserRole | str


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        mails: MailSender | None = None,
    ) -> None:
        self._users = users
        self._mails = mails

    def execute(self, data: RegisterUserInput) -> None:
        activation_hash = generate_opaque_hash()

        # Uniqueness is enforced by the store; its conflict error propagates.
        user = self._users.create(
            NewUser(
                username=data.username,
                email=data.email,
                password=data.password,
                full_name=data.full_name,
                role=UserRole.parse(data.role),
                status=UserStatus.INACTIVE,
                hash=activation_hash,
            )
        )
        logger.info(f"auth.register: ok user_id={user.id} role={user.role.value}")

        if self._mails is None or not user.email:
            return
        try:
            self._mails.confirm_register_user(MailData(to=user.email, hash=activation_hash))
        except Exception:
            logger.exception(f"auth.register: confirmation mail failed user_id={user.id}")
