"""Use-case for dropping the session identity."""

from __future__ import annotations

from collections.abc import MutableMapping

from authportal.infrastructure.sessions.manager import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, session: MutableMapping[str, str]) -> str | None:
        username = self._sessions.get_identity(session)
        self._sessions.clear(session)
        return username
