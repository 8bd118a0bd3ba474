# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authportal.infrastructure.db import Database
from authportal.shared.errors.base import StoreError


def check_database(database: Database) -> bool:
    try:
        with database.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StoreError("check_database", detail=str(exc)) from exc
    return True


__all__ = ["check_database"]
