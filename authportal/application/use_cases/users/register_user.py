# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.application.services.validation import validate_registration
from authportal.domain.users.entities import RegisterInput, User
from authportal.domain.users.exceptions import UserAlreadyExistsError
from authportal.domain.users.repositories import PasswordHasher, UserRepository
from authportal.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, data: RegisterInput) -> User:
        validate_registration(data).raise_for_error()

        # Login accepts either column, so each new identifier must be free in both
        if self._users.exists_username(data.username) or self._users.exists_email(data.username):
            raise UserAlreadyExistsError("username")
        if self._users.exists_email(data.email) or self._users.exists_username(data.email):
            raise UserAlreadyExistsError("email")

        hashed = self._password_hasher.hash(data.password)
        # A concurrent registration can still win between the checks and here;
        # insert_user reports that through the store's unique constraint.
        user = self._users.insert_user(data.username, data.email, hashed)
        logger.info(f"auth.register: created user_id={user.id}")
        return user
