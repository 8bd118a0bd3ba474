# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import MutableMapping

from authportal.domain.users.entities import LoginInput, User
from authportal.domain.users.exceptions import InvalidCredentialsError
from authportal.domain.users.repositories import PasswordHasher, UserRepository
from authportal.infrastructure.sessions.manager import SessionManager


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        sessions: SessionManager,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._sessions = sessions
        self._decoy_hash: str | None = None

    def _verify_decoy(self, password: str) -> None:
        # Unknown identifiers pay the same hashing cost as a wrong password
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        self._password_hasher.verify(password, self._decoy_hash)

    def execute(self, data: LoginInput, session: MutableMapping[str, str]) -> User:
        user = self._users.find_by_identifier(data.identifier)
        if user is None:
            self._verify_decoy(data.password)
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(data.password, user.password_hash):
            raise InvalidCredentialsError()

        self._sessions.set_identity(session, user.username)
        return user
