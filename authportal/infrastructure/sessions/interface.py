# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Request, Response
from flask.sessions import SecureCookieSession, SessionInterface

from authportal.infrastructure.sessions.codec import SessionCodec


class ClaimsSession(SecureCookieSession):
    pass


class ClaimsSessionInterface(SessionInterface):
    """Keeps the whole session in one cookie, verified through a codec on every read."""

    session_class = ClaimsSession

    def __init__(
        self,
        codec: SessionCodec,
        *,
        cookie_name: str = "authportal_session",
        secure: bool = False,
        samesite: str | None = "Lax",
    ) -> None:
        self._codec = codec
        self._cookie_name = cookie_name
        self._secure = secure
        self._samesite = samesite

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def open_session(self, app: Flask, request: Request) -> ClaimsSession:
        token = request.cookies.get(self._cookie_name, "")
        claims = self._codec.decode(token) if token else None
        return self.session_class(claims or {})

    def save_session(self, app: Flask, session: ClaimsSession, response: Response) -> None:  # type: ignore[override]
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.accessed:
            response.vary.add("Cookie")

        if not session:
            if session.modified:
                response.delete_cookie(
                    self._cookie_name,
                    domain=domain,
                    path=path,
                    secure=self._secure,
                    httponly=True,
                    samesite=self._samesite,
                )
            return

        if not session.modified:
            return

        response.set_cookie(
            self._cookie_name,
            self._codec.encode(dict(session)),
            domain=domain,
            path=path,
            secure=self._secure,
            httponly=True,
            samesite=self._samesite,
        )


__all__ = ["ClaimsSession", "ClaimsSessionInterface"]
