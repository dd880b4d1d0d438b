# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from staffauth.application.services.tokens import JwtTokenIssuer
from staffauth.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from staffauth.application.use_cases.users.login_user import LoginUserUseCase
from staffauth.application.use_cases.users.logout_user import LogoutUserUseCase
from staffauth.application.use_cases.users.refresh_token import RefreshTokenUseCase
from staffauth.application.use_cases.users.register_user import (
    RegisterUserInput,
    RegisterUserUseCase,
)
from staffauth.application.use_cases.users.reset_password import ResetPasswordUseCase
from staffauth.application.use_cases.users.user_status import GetUserStatusUseCase
from staffauth.domain.users.entities import AccessClaims, RefreshClaims
from staffauth.domain.users.exceptions import InvalidTokenError
from staffauth.interfaces.http.dto.auth import (
    ForgotPasswordRequestDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    ResetPasswordRequestDTO,
)
from staffauth.shared.errors.validation import raise_validation_error


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidTokenError("Missing bearer token")
    return token.strip()


def _empty() -> tuple[Response, int]:
    return Response(status=204), 204


class AuthController:
    def __init__(
        self,
        *,
        tokens: JwtTokenIssuer,
        login_use_case: LoginUserUseCase,
        register_use_case: RegisterUserUseCase,
        status_use_case: GetUserStatusUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        reset_password_use_case: ResetPasswordUseCase,
        refresh_use_case: RefreshTokenUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._tokens = tokens
        self._login_use_case = login_use_case
        self._register_use_case = register_use_case
        self._status_use_case = status_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._reset_password_use_case = reset_password_use_case
        self._refresh_use_case = refresh_use_case
        self._logout_use_case = logout_use_case

    def _access_claims(self) -> AccessClaims:
        claims = self._tokens.verify_access(_bearer_token())
        g.user_id = claims.id
        return claims

    def _refresh_claims(self) -> RefreshClaims:
        return self._tokens.verify_refresh(_bearer_token())

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.email, dto.password)
        g.user_id = result.user.id
        return jsonify(result.to_dict()), 200

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._register_use_case.execute(
            RegisterUserInput(
                email=dto.email,
                username=dto.username,
                password=dto.password,
                full_name=dto.full_name,
                role=dto.role,
            )
        )
        return _empty()

    def me(self) -> tuple[Response, int]:
        user = self._status_use_case.execute(self._access_claims())
        return jsonify(user.to_public_dict() if user else None), 200

    def forgot_password(self) -> tuple[Response, int]:
        try:
            dto = ForgotPasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._forgot_password_use_case.execute(dto.email)
        return _empty()

    def reset_password(self) -> tuple[Response, int]:
        try:
            dto = ResetPasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._reset_password_use_case.execute(dto.hash, dto.password)
        return _empty()

    def refresh(self) -> tuple[Response, int]:
        claims = self._refresh_claims()
        pair = self._refresh_use_case.execute(claims.session_id)
        return jsonify(pair.to_dict()), 200

    def logout(self) -> tuple[Response, int]:
        claims = self._refresh_claims()
        self._logout_use_case.execute(claims.session_id)
        return _empty()

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")
        bp.add_url_rule("/email/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/email/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/forgot/password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule("/reset/password", view_func=self.reset_password, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
