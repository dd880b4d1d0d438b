# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JWT token service.

Mints the access/refresh pair bound to a session and verifies incoming
tokens.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import jwt

from staffauth.domain.users.entities import AccessClaims, RefreshClaims, TokenPair
from staffauth.domain.users.exceptions import InvalidTokenError
from staffauth.domain.users.repositories import TokenIssuer
from staffauth.shared.config import AuthSettings
from staffauth.shared.errors.base import ConfigurationError


class JwtTokenIssuer(TokenIssuer):
    """Issues and verifies HS256 tokens.

    Access tokens carry ``{"id", "sessionId"}`` and are signed with the access
    secret. Refresh tokens carry only ``{"sessionId"}`` and are signed with the
    refresh secret, so one can never be replayed as the other.

    Examples
    --------
    >>> issuer = JwtTokenIssuer(settings)
    >>> pair = issuer.issue(user_id=1, session_id=7)
    >>> issuer.verify_access(pair.token).session_id
    7
    """

    ALGORITHM = "HS256"

    def __init__(self, settings: AuthSettings | None) -> None:
        if settings is None:
            raise ConfigurationError(detail="auth settings are not configured")
        missing = [
            name
            for name, value in (
                ("AUTH_JWT_SECRET", settings.secret),
                ("AUTH_JWT_TOKEN_EXPIRES_IN", settings.expires),
                ("AUTH_REFRESH_SECRET", settings.refresh_secret),
                ("AUTH_REFRESH_TOKEN_EXPIRES_IN", settings.refresh_expires),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)
        self._settings = settings

    def issue(self, user_id: int, session_id: int, now: datetime | None = None) -> TokenPair:
        """Sign a fresh pair for ``session_id``.

        Parameters
        ----------
        user_id
            Owner of the session, embedded in the access token only
        session_id
            Session the pair is bound to
        now
            Issue instant; defaults to the current UTC time

        Returns
        -------
        TokenPair with ``token_expires`` in epoch milliseconds
        """
        issued_at = now or datetime.now(UTC)
        access_exp = issued_at + self._settings.expires
        refresh_exp = issued_at + self._settings.refresh_expires

        token = self._sign(
            {"id": user_id, "sessionId": session_id},
            secret=self._settings.secret,
            issued_at=issued_at,
            expires_at=access_exp,
        )
        refresh_token = self._sign(
            {"sessionId": session_id},
            secret=self._settings.refresh_secret,
            issued_at=issued_at,
            expires_at=refresh_exp,
        )
        return TokenPair(
            token=token,
            refresh_token=refresh_token,
            token_expires=int(access_exp.timestamp() * 1000),
        )

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        """Decode ``token`` with ``secret``.

        Expiry is checked against the ``exp`` claim by PyJWT.

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, or malformed
        """
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    def verify_access(self, token: str) -> AccessClaims:
        payload = self.verify(token, self._settings.secret)
        try:
            return AccessClaims(id=int(payload["id"]), session_id=int(payload["sessionId"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def verify_refresh(self, token: str) -> RefreshClaims:
        payload = self.verify(token, self._settings.refresh_secret)
        if "id" in payload:
            # An access token signed with a reused secret is still not a refresh token.
            raise InvalidTokenError("Malformed token payload: unexpected claim 'id'")
        try:
            return RefreshClaims(session_id=int(payload["sessionId"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def _sign(
        self,
        claims: dict[str, Any],
        *,
        secret: str,
        issued_at: datetime,
        expires_at: datetime,
    ) -> str:
        payload = {**claims, "iat": issued_at, "exp": expires_at}
        return jwt.encode(payload, secret, algorithm=self.ALGORITHM)
