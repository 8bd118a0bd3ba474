# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, redirect, session, url_for

from authportal.infrastructure.rendering import Renderer
from authportal.infrastructure.sessions.manager import SessionManager

DASHBOARD_VIEW = "dashboard.html"


class DashboardController:
    def __init__(self, *, renderer: Renderer, sessions: SessionManager) -> None:
        self._renderer = renderer
        self._sessions = sessions

    def show_dashboard(self) -> Response:
        username = self._sessions.get_identity(session)
        if username is None:
            return redirect(url_for("auth.show_login"), code=303)  # type: ignore[return-value]

        body = self._renderer.render(
            DASHBOARD_VIEW,
            {
                "username": username,
                "welcome_message": f"Welcome to your dashboard, {username}!",
            },
        )
        return Response(body, status=200, mimetype="text/html")

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("dashboard", __name__)
        bp.add_url_rule("/dashboard", view_func=self.show_dashboard, methods=["GET"])
        return bp
