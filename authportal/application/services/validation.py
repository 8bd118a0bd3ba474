"""Field-level rules for registration input.

Checks run in a fixed order and the first violated rule is the only one
reported. Nothing here touches the store or the session.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from authportal.domain.users.entities import RegisterInput
from authportal.shared.errors.base import ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8

USERNAME_LENGTH_MESSAGE = "Username must be between 3 and 20 characters long."
USERNAME_WHITESPACE_MESSAGE = "Username cannot contain spaces."
PASSWORD_LENGTH_MESSAGE = "Password must be at least 8 characters long."
PASSWORD_MISMATCH_MESSAGE = "Password and confirmation do not match."
EMAIL_FORMAT_MESSAGE = "Invalid email format."

_EMAIL_RE = re.compile(r"[\w\-\.]+@([\w\-]+\.)+[a-zA-Z]{2,}")


@dataclass(slots=True, frozen=True)
class ValidationResult:
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, message: str) -> ValidationResult:
        return cls(error=message)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise ValidationError(self.error)


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def validate_registration(data: RegisterInput) -> ValidationResult:
    if not USERNAME_MIN_LENGTH <= len(data.username) <= USERNAME_MAX_LENGTH:
        return ValidationResult.failure(USERNAME_LENGTH_MESSAGE)
    if any(ch.isspace() for ch in data.username):
        return ValidationResult.failure(USERNAME_WHITESPACE_MESSAGE)
    if len(data.password) < PASSWORD_MIN_LENGTH:
        return ValidationResult.failure(PASSWORD_LENGTH_MESSAGE)
    if data.password != data.password_confirm:
        return ValidationResult.failure(PASSWORD_MISMATCH_MESSAGE)
    if not is_valid_email(data.email):
        return ValidationResult.failure(EMAIL_FORMAT_MESSAGE)
    return ValidationResult.success()


__all__ = [
    "EMAIL_FORMAT_MESSAGE",
    "PASSWORD_LENGTH_MESSAGE",
    "PASSWORD_MISMATCH_MESSAGE",
    "USERNAME_LENGTH_MESSAGE",
    "USERNAME_WHITESPACE_MESSAGE",
    "ValidationResult",
    "is_valid_email",
    "validate_registration",
]
