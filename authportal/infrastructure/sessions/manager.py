# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import MutableMapping

from authportal.shared.logging import logger

IDENTITY_CLAIM = "identity"


class SessionManager:
    """Reads and writes claims on a request's session mapping.

    There is no server-side record of issued tokens; ``clear`` only changes
    what the client is told to carry from now on.
    """

    def set(self, session: MutableMapping[str, str], claim: str, value: str) -> None:
        session[claim] = value

    def get(self, session: MutableMapping[str, str], claim: str = IDENTITY_CLAIM) -> str | None:
        value = session.get(claim)
        if not isinstance(value, str) or not value:
            return None
        return value

    def clear(self, session: MutableMapping[str, str]) -> None:
        if session:
            logger.debug("session.clear: dropping claims")
        session.clear()

    def set_identity(self, session: MutableMapping[str, str], username: str) -> None:
        self.set(session, IDENTITY_CLAIM, username)

    def get_identity(self, session: MutableMapping[str, str]) -> str | None:
        return self.get(session, IDENTITY_CLAIM)


__all__ = ["IDENTITY_CLAIM", "SessionManager"]
