# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response

from authportal.infrastructure.db import Database
from authportal.infrastructure.health import check_database
from authportal.infrastructure.rendering import Renderer
from authportal.shared.errors.base import StoreError
from authportal.shared.logging import logger


class MiscController:
    def __init__(self, *, renderer: Renderer, database: Database) -> None:
        self._renderer = renderer
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.welcome, methods=["GET"])
        bp.add_url_rule("/check-db", view_func=self.check_db, methods=["GET"])
        return bp

    def welcome(self) -> Response:
        return Response(self._renderer.render("welcome.html", {}), mimetype="text/html")

    def check_db(self) -> Response:
        try:
            check_database(self._database)
        except StoreError as exc:
            logger.error(f"Database connection failed: {dict(exc.context or {})}")
            return Response("Database connection failed", status=500, mimetype="text/plain")
        return Response("Database connection successful", status=200, mimetype="text/plain")
