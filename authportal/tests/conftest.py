from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from authportal.app import create_app
from authportal.container import Container
from authportal.domain.users.entities import User
from authportal.domain.users.exceptions import UserAlreadyExistsError
from authportal.domain.users.repositories import PasswordHasher, UserRepository
from authportal.shared.config import AppConfig, DatabaseConfig, HashingConfig, SecurityConfig

TEST_SECRET = "test-session-secret-0123456789"
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class InMemoryUserRepository(UserRepository):
    """Enforces uniqueness at insert time, like the real table constraints."""

    def __init__(self, *, stale_checks: bool = False) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.inserts = 0
        # Simulates a concurrent writer: pre-checks never see existing rows
        self._stale_checks = stale_checks

    @property
    def users(self) -> list[User]:
        return list(self._users.values())

    def find_by_identifier(self, identifier: str) -> User | None:
        for user in self._users.values():
            if identifier in (user.username, user.email):
                return user
        return None

    def exists_username(self, username: str) -> bool:
        if self._stale_checks:
            return False
        return any(u.username == username for u in self._users.values())

    def exists_email(self, email: str) -> bool:
        if self._stale_checks:
            return False
        return any(u.email == email for u in self._users.values())

    def insert_user(self, username: str, email: str, password_hash: str) -> User:
        self.inserts += 1
        if any(u.username == username for u in self._users.values()):
            raise UserAlreadyExistsError("username")
        if any(u.email == email for u in self._users.values()):
            raise UserAlreadyExistsError("email")
        user = User(id=self._seq, username=username, email=email, password_hash=password_hash)
        self._seq += 1
        self._users[user.id] = user
        return user


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def stale_users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository(stale_checks=True)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


def make_config(tmp_path: Path, **security: object) -> AppConfig:
    return AppConfig(
        session_secret=TEST_SECRET,
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'authportal-test.db'}"),
        hashing=HashingConfig(method=FAST_HASH_METHOD),
        security=SecurityConfig(**security),
    )


@pytest.fixture()
def config_factory(tmp_path: Path):
    def _factory(**security: object) -> AppConfig:
        return make_config(tmp_path, **security)

    return _factory


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return make_config(tmp_path)


@pytest.fixture()
def container(config: AppConfig) -> Iterator[Container]:
    c = Container(config)
    yield c
    c.database.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
