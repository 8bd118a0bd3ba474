# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authportal.infrastructure.db.session import Base


class User(Base):
    __tablename__ = "users"
    # Uniqueness is decided here; repository pre-checks only pick the message
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(20), index=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
