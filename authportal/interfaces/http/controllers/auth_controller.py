# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, redirect, request, session, url_for

from authportal.application.use_cases.users.login_user import LoginUserUseCase
from authportal.application.use_cases.users.logout_user import LogoutUserUseCase
from authportal.application.use_cases.users.register_user import RegisterUserUseCase
from authportal.domain.users.exceptions import InvalidCredentialsError
from authportal.infrastructure.audit import AuditAction, audit_log
from authportal.infrastructure.rendering import Renderer
from authportal.interfaces.http.dto.auth import LoginFormDTO, RegisterFormDTO
from authportal.shared.errors.base import DomainError
from authportal.shared.logging import logger

LOGIN_VIEW = "login.html"
REGISTER_VIEW = "register.html"


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _html(body: str) -> Response:
    return Response(body, status=200, mimetype="text/html")


def _see_other(endpoint: str) -> Response:
    return redirect(url_for(endpoint), code=303)  # type: ignore[return-value]


class AuthController:
    def __init__(
        self,
        *,
        renderer: Renderer,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._renderer = renderer
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case

    def _render_register(self, error: str | None = None) -> Response:
        context = {"error": error} if error else {}
        return _html(self._renderer.render(REGISTER_VIEW, context))

    def _render_login(self, error: str | None = None) -> Response:
        context = {"error": error} if error else {}
        return _html(self._renderer.render(LOGIN_VIEW, context))

    def show_register(self) -> Response:
        return self._render_register()

    def register(self) -> Response:
        dto = RegisterFormDTO.model_validate(request.form.to_dict())

        try:
            user = self._register_use_case.execute(dto.to_input())
        except DomainError as exc:
            audit_log(
                AuditAction.REGISTER_REJECTED,
                ip_address=_get_client_ip(),
                details={"reason": exc.code, **dict(exc.context or {})},
                success=False,
            )
            return self._render_register(exc.message)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": user.username},
        )
        return _see_other("auth.show_login")

    def show_login(self) -> Response:
        return self._render_login()

    def login(self) -> Response:
        dto = LoginFormDTO.model_validate(request.form.to_dict())
        ip_address = _get_client_ip()

        try:
            user = self._login_use_case.execute(dto.to_input(), session)
        except InvalidCredentialsError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"identifier": dto.identifier},
                success=False,
            )
            return self._render_login(exc.message)

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"username": user.username},
        )
        logger.info(f"auth.login: ok user_id={user.id}")
        return _see_other("dashboard.show_dashboard")

    def logout(self) -> Response:
        username = self._logout_use_case.execute(session)
        audit_log(
            AuditAction.LOGOUT,
            ip_address=_get_client_ip(),
            details={"username": username} if username else {},
        )
        return _see_other("auth.show_login")

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/register", "show_register", view_func=self.show_register, methods=["GET"])
        bp.add_url_rule("/register", "register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", "show_login", view_func=self.show_login, methods=["GET"])
        bp.add_url_rule("/login", "login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", "logout", view_func=self.logout, methods=["POST"])
        return bp
