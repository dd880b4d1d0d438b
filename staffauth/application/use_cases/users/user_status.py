# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffauth.domain.users.entities import AccessClaims, User
from staffauth.domain.users.repositories import UserRepository


class GetUserStatusUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, claims: AccessClaims) -> User | None:
        return self._users.find_by_id(claims.id)
