# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.shared.errors.base import DomainError

USERNAME_TAKEN_MESSAGE = "Username is already taken."
EMAIL_TAKEN_MESSAGE = "Email is already registered."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"

    def __init__(self, field: str = "username") -> None:
        message = EMAIL_TAKEN_MESSAGE if field == "email" else USERNAME_TAKEN_MESSAGE
        super().__init__(message=message, context={"field": field})

    @property
    def field(self) -> str:
        return str((self.context or {}).get("field", "username"))


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    # Identical for unknown identifier and wrong password
    message = INVALID_CREDENTIALS_MESSAGE
