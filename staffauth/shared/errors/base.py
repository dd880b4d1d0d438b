# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )


class UnprocessableEntityError(AppError):
    """Expected client-side outcome keyed by the offending field."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        super().__init__(
            code="unprocessable_entity",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context={"errors": dict(errors)},
        )

    @property
    def errors(self) -> dict[str, str]:
        return dict((self.context or {}).get("errors", {}))

    def to_dict(self) -> dict[str, Any]:
        return {"status": int(self.status), "errors": self.errors}


class UnauthorizedError(AppError):
    def __init__(self, reason: str | None = None) -> None:
        super().__init__(code="unauthorized", status=HTTPStatus.UNAUTHORIZED)
        # Kept for logs only; never serialized.
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code}


class ConflictError(AppError):
    def __init__(
        self,
        code: str = "conflict",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=HTTPStatus.CONFLICT, context=context)


class ConfigurationError(InfrastructureError):
    def __init__(self, missing: list[str] | None = None, *, detail: str | None = None) -> None:
        context: dict[str, Any] = {}
        if missing:
            context["missing"] = list(missing)
        if detail:
            context["detail"] = detail
        super().__init__("configuration_error", context=context or None)

    def __str__(self) -> str:
        parts = [self.code]
        if self.context:
            if "missing" in self.context:
                parts.append("missing: " + ", ".join(self.context["missing"]))
            if "detail" in self.context:
                parts.append(str(self.context["detail"]))
        return "; ".join(parts)
