from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from staffauth.domain.users.entities import UserRole
from staffauth.shared.errors.validation_types import ValidationErrorType

MIN_PASSWORD_LENGTH = 6


def _lower(value: object) -> object:
    return value.strip().lower() if isinstance(value, str) else value


def _not_blank(value: str, field: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "{field} cannot be empty",
            {"field": field},
        )
    return value


class LoginRequestDTO(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value: object) -> object:
        return _lower(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _not_blank(value, "password")


class RegisterRequestDTO(BaseModel):
    email: EmailStr
    username: str
    password: str
    full_name: str = Field(alias="fullName")
    role: UserRole

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value: object) -> object:
        return _lower(value)

    @field_validator("username", "full_name")
    @classmethod
    def validate_not_blank(cls, value: str, info) -> str:
        return _not_blank(value, info.field_name)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "Password must be at least {min_length} characters long",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, value: object) -> object:
        if isinstance(value, str) and value.lower() in UserRole._value2member_map_:
            return value.lower()
        if isinstance(value, UserRole):
            return value
        raise PydanticCustomError(
            ValidationErrorType.ROLE_UNKNOWN,
            "Role must be one of: {roles}",
            {"roles": ", ".join(role.value for role in UserRole)},
        )


class ForgotPasswordRequestDTO(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value: object) -> object:
        return _lower(value)


class ResetPasswordRequestDTO(BaseModel):
    hash: str
    password: str

    @field_validator("hash")
    @classmethod
    def validate_hash(cls, value: str) -> str:
        return _not_blank(value, "hash")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "Password must be at least {min_length} characters long",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value
