# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    def find_by_identifier(self, identifier: str) -> User | None: ...
    def exists_username(self, username: str) -> bool: ...
    def exists_email(self, email: str) -> bool: ...
    def insert_user(self, username: str, email: str, password_hash: str) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
