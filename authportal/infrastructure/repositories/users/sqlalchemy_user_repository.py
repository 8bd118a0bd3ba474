# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from authportal.domain.users.entities import User as DomainUser
from authportal.domain.users.exceptions import UserAlreadyExistsError
from authportal.domain.users.repositories import UserRepository
from authportal.infrastructure.db import Database
from authportal.infrastructure.db.models import User
from authportal.shared.errors.base import StoreError
from authportal.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
    )


# sqlite: "UNIQUE constraint failed: users.email"
# postgres: 'constraint "uq_users_email" ... Key (email)=(a@example.com)'
# mysql: "Duplicate entry 'a@example.com' for key 'users.uq_users_email'"
_EMAIL_CONFLICT_MARKERS = ("uq_users_email", "users.email", "(email)=")


def _conflicting_field(exc: IntegrityError, *values: str) -> str:
    detail = str(exc.orig)
    # Drivers echo the rejected values; drop them so only identifiers are matched
    for value in values:
        if value:
            detail = detail.replace(f"'{value}'", "''").replace(f"({value})", "()")
    detail = detail.lower()
    if any(marker in detail for marker in _EMAIL_CONFLICT_MARKERS):
        return "email"
    return "username"


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_identifier(self, identifier: str) -> DomainUser | None:
        try:
            with self._db.session_scope() as session:
                row = (
                    session.query(User)
                    .filter(or_(User.username == identifier, User.email == identifier))
                    .order_by(User.id.asc())
                    .first()
                )
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_identifier: query failed: {exc}")
            raise StoreError("find_by_identifier", detail=type(exc).__name__) from exc

    def exists_username(self, username: str) -> bool:
        try:
            with self._db.session_scope() as session:
                return session.query(User.id).filter(User.username == username).first() is not None
        except SQLAlchemyError as exc:
            logger.error(f"users.exists_username: query failed: {exc}")
            raise StoreError("exists_username", detail=type(exc).__name__) from exc

    def exists_email(self, email: str) -> bool:
        try:
            with self._db.session_scope() as session:
                return session.query(User.id).filter(User.email == email).first() is not None
        except SQLAlchemyError as exc:
            logger.error(f"users.exists_email: query failed: {exc}")
            raise StoreError("exists_email", detail=type(exc).__name__) from exc

    def insert_user(self, username: str, email: str, password_hash: str) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(username=username, email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            field = _conflicting_field(exc, username, email)
            logger.info(f"users.insert_user: unique constraint rejected duplicate {field}")
            raise UserAlreadyExistsError(field) from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.insert_user: insert failed: {exc}")
            raise StoreError("insert_user", detail=type(exc).__name__) from exc

