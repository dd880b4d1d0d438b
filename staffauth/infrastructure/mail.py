# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""SMTP mail sender for account activation and password reset links."""

from __future__ import annotations

import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import urlencode

from staffauth.domain.users.repositories import MailData, MailSender
from staffauth.shared.config import MailConfig
from staffauth.shared.logging import logger


def _redact_email(email: str) -> str:
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpMailSender(MailSender):
    def __init__(self, config: MailConfig, frontend_domain: str, *, timeout: float = 30.0):
        self._config = config
        self._frontend_domain = frontend_domain.rstrip("/")
        self._timeout = timeout

    @property
    def from_email(self) -> str | None:
        return self._config.default_email or self._config.smtp_user

    @property
    def is_configured(self) -> bool:
        return bool(self._config.smtp_host and self.from_email)

    def link(self, path: str, hash: str) -> str:
        return f"{self._frontend_domain}{path}?{urlencode({'hash': hash})}"

    def confirm_register_user(self, mail: MailData) -> None:
        url = self.link("/confirm-email", mail.hash)
        self._send(
            mail.to,
            subject="Confirm your email",
            text_body=(
                "Welcome aboard.\n\n"
                f"Open the link below to activate your account:\n{url}\n"
            ),
            html_body=(
                "<p>Welcome aboard.</p>"
                f'<p><a href="{url}">Activate your account</a></p>'
            ),
        )

    def forgot_password(self, mail: MailData) -> None:
        url = self.link("/password-change", mail.hash)
        self._send(
            mail.to,
            subject="Reset your password",
            text_body=(
                "Someone asked to reset the password of your account.\n\n"
                f"Open the link below to choose a new one:\n{url}\n\n"
                "Ignore this message if it was not you.\n"
            ),
            html_body=(
                "<p>Someone asked to reset the password of your account.</p>"
                f'<p><a href="{url}">Choose a new password</a></p>'
                "<p>Ignore this message if it was not you.</p>"
            ),
        )

    def _send(self, to: str, *, subject: str, text_body: str, html_body: str) -> None:
        if not self.is_configured:
            # Dev mode: nothing leaves the process.
            logger.info(f"mail.dev: to={_redact_email(to)} subject={subject!r}")
            logger.debug(text_body)
            return

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._config.default_name} <{self.from_email}>"
        msg["To"] = to
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        context = ssl.create_default_context()
        host = self._config.smtp_host
        port = self._config.smtp_port
        logger.debug(f"mail.connect: host={host} port={port} tls={self._config.smtp_use_tls}")

        if self._config.smtp_use_tls:
            with smtplib.SMTP(host, port, timeout=self._timeout) as server:
                server.starttls(context=context)
                self._login(server)
                server.sendmail(self.from_email, to, msg.as_string())
        else:
            with smtplib.SMTP_SSL(host, port, context=context, timeout=self._timeout) as server:
                self._login(server)
                server.sendmail(self.from_email, to, msg.as_string())

        logger.info(f"mail.sent: to={_redact_email(to)} subject={subject!r}")

    def _login(self, server: smtplib.SMTP) -> None:
        if self._config.smtp_user and self._config.smtp_password:
            server.login(self._config.smtp_user, self._config.smtp_password)
