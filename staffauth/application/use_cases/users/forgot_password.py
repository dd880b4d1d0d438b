# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.application.services.opaque_hash import generate_opaque_hash
from staffauth.domain.users.exceptions import EmailNotExistsError
from staffauth.domain.users.repositories import (
    MailData,
    MailSender,
    ResetPasswordRepository,
    UserRepository,
)
from staffauth.shared.logging import logger


class ForgotPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        reset_requests: ResetPasswordRepository,
        mails: MailSender | None = None,
    ) -> None:
        self._users = users
        self._reset_requests = reset_requests
        self._mails = mails

    def execute(self, email: str) -> None:
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("auth.forgot_password: unknown email")
            raise EmailNotExistsError()

        # Earlier requests stay valid until used.
        reset_hash = generate_opaque_hash()
        request = self._reset_requests.create(reset_hash, user)
        logger.info(f"auth.forgot_password: ok user_id={user.id} request_id={request.id}")

        if self._mails is None:
            return
        try:
            self._mails.forgot_password(MailData(to=email, hash=reset_hash))
        except Exception:
            logger.exception(f"auth.forgot_password: mail failed user_id={user.id}")
