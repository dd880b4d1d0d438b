# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    PASSWORD_TOO_SHORT = "minLength"
    ROLE_UNKNOWN = "unknownRole"
