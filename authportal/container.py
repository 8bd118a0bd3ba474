"""Application dependency container."""

from __future__ import annotations

import secrets
from functools import cached_property

from authportal.application.services.password_hashing import WerkzeugPasswordHasher
from authportal.application.use_cases.users.login_user import LoginUserUseCase
from authportal.application.use_cases.users.logout_user import LogoutUserUseCase
from authportal.application.use_cases.users.register_user import RegisterUserUseCase
from authportal.infrastructure.db import Database
from authportal.infrastructure.rendering import JinjaRenderer
from authportal.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authportal.infrastructure.sessions import (
    ClaimsSessionInterface,
    SessionCodec,
    SessionManager,
    build_codec,
)
from authportal.interfaces.http.controllers.auth_controller import AuthController
from authportal.interfaces.http.controllers.dashboard_controller import DashboardController
from authportal.interfaces.http.controllers.misc_controller import MiscController
from authportal.shared.config import AppConfig
from authportal.shared.logging import logger


class Container:
    """Wires collaborators once per process.

    Any attribute can be replaced on the instance before it is first read,
    which is how tests swap in fakes.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def session_secret(self) -> str:
        if self.config.session_secret:
            return self.config.session_secret
        logger.info("session.secret: none configured, generated a per-process key")
        return secrets.token_urlsafe(32)

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def renderer(self) -> JinjaRenderer:
        return JinjaRenderer()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(
            method=self.config.hashing.method,
            salt_length=self.config.hashing.salt_length,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_codec(self) -> SessionCodec:
        return build_codec(self.session_secret, encrypt=self.config.security.encrypt_session)

    @cached_property
    def session_interface(self) -> ClaimsSessionInterface:
        security = self.config.security
        return ClaimsSessionInterface(
            self.session_codec,
            cookie_name=security.cookie_name,
            secure=security.cookie_secure,
            samesite=security.cookie_samesite,
        )

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager()

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            sessions=self.session_manager,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            renderer=self.renderer,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def dashboard_controller(self) -> DashboardController:
        return DashboardController(renderer=self.renderer, sessions=self.session_manager)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(renderer=self.renderer, database=self.database)
