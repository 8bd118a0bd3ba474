# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import LoginInput, RegisterInput, User
from .users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from .users.repositories import PasswordHasher, UserRepository

__all__ = [
    "InvalidCredentialsError",
    "LoginInput",
    "PasswordHasher",
    "RegisterInput",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
