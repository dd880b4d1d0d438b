"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from staffauth.application.services.password_hashing import WerkzeugPasswordHasher
from staffauth.application.services.tokens import JwtTokenIssuer
from staffauth.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from staffauth.application.use_cases.users.login_user import LoginUserUseCase
from staffauth.application.use_cases.users.logout_user import LogoutUserUseCase
from staffauth.application.use_cases.users.refresh_token import RefreshTokenUseCase
from staffauth.application.use_cases.users.register_user import RegisterUserUseCase
from staffauth.application.use_cases.users.reset_password import ResetPasswordUseCase
from staffauth.application.use_cases.users.user_status import GetUserStatusUseCase
from staffauth.domain.users.repositories import MailSender
from staffauth.infrastructure.mail import SmtpMailSender
from staffauth.infrastructure.repositories.users.sqlalchemy_reset_password_repository import (
    SqlAlchemyResetPasswordRepository,
)
from staffauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from staffauth.infrastructure.unit_of_work import SessionFactory
from staffauth.interfaces.http.controllers.auth_controller import AuthController
from staffauth.shared.config import AppConfig, AuthSettings, load_config


class Container:
    def __init__(
        self,
        *,
        config: AppConfig | None = None,
        session_factory: SessionFactory | None = None,
        auth_settings: AuthSettings | None = None,
        mail_sender: MailSender | None = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory
        self._auth_settings = auth_settings
        self._mail_sender = mail_sender

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def auth_settings(self) -> AuthSettings:
        return self._auth_settings or AuthSettings.from_config(self.config.auth)

    @cached_property
    def session_factory(self) -> SessionFactory:
        if self._session_factory is not None:
            return self._session_factory
        from staffauth.infrastructure.db import SessionLocal

        return SessionLocal

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(self.auth_settings)

    @cached_property
    def mail_sender(self) -> MailSender:
        return self._mail_sender or SmtpMailSender(self.config.mail, self.config.frontend_domain)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory, self.password_hasher)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory)

    @cached_property
    def reset_password_repository(self) -> SqlAlchemyResetPasswordRepository:
        return SqlAlchemyResetPasswordRepository(self.session_factory)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(users=self.user_repository, mails=self.mail_sender)

    @cached_property
    def user_status_use_case(self) -> GetUserStatusUseCase:
        return GetUserStatusUseCase(users=self.user_repository)

    @cached_property
    def forgot_password_use_case(self) -> ForgotPasswordUseCase:
        return ForgotPasswordUseCase(
            users=self.user_repository,
            reset_requests=self.reset_password_repository,
            mails=self.mail_sender,
        )

    @cached_property
    def reset_password_use_case(self) -> ResetPasswordUseCase:
        return ResetPasswordUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            reset_requests=self.reset_password_repository,
        )

    @cached_property
    def refresh_token_use_case(self) -> RefreshTokenUseCase:
        return RefreshTokenUseCase(sessions=self.session_repository, tokens=self.token_issuer)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            tokens=self.token_issuer,
            login_use_case=self.login_user_use_case,
            register_use_case=self.register_user_use_case,
            status_use_case=self.user_status_use_case,
            forgot_password_use_case=self.forgot_password_use_case,
            reset_password_use_case=self.reset_password_use_case,
            refresh_use_case=self.refresh_token_use_case,
            logout_use_case=self.logout_user_use_case,
        )
