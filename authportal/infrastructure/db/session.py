# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from authportal.shared.config import DatabaseConfig
from authportal.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.startswith("sqlite:///:memory:?")


def _engine_kwargs(config: DatabaseConfig) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if config.url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }
    if _is_memory_sqlite(config.url):
        # One shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
        return kwargs
    kwargs.update(
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
    )
    return kwargs


class Database:
    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self.engine: Engine = create_engine(config.url, **_engine_kwargs(config))
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except Exception as exc:
            logger.warning(f"db.session: {type(exc).__name__}, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_db(self) -> None:
        # Importing the models registers them on Base.metadata
        from authportal.infrastructure.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def dispose(self) -> None:
        self.engine.dispose()
