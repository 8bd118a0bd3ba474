# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Client-held session tokens.

A codec turns a claims map into an opaque token and back. Anything that does
not verify decodes to ``None`` so callers only ever see "a session" or
"no session".
"""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from typing import Any, Protocol

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from itsdangerous import BadData, URLSafeSerializer

from authportal.shared.logging import logger

Claims = dict[str, str]

DEFAULT_SALT = "authportal.session.v1"
_FERNET_KEY_INFO = b"authportal session cookie encryption"


class SessionCodec(Protocol):
    def encode(self, claims: Mapping[str, str]) -> str: ...
    def decode(self, token: str) -> Claims | None: ...


def _coerce_claims(data: Any) -> Claims | None:
    if not isinstance(data, dict):
        return None
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
        return None
    return dict(data)


class SignedCookieCodec(SessionCodec):
    """HMAC-signed JSON; readable by the client, not forgeable."""

    def __init__(self, secret_key: str | bytes, *, salt: str = DEFAULT_SALT) -> None:
        self._serializer = URLSafeSerializer(secret_key, salt=salt)

    def encode(self, claims: Mapping[str, str]) -> str:
        return str(self._serializer.dumps(dict(claims)))

    def decode(self, token: str) -> Claims | None:
        if not token:
            return None
        try:
            data = self._serializer.loads(token)
        except BadData:
            logger.debug("session.decode: rejected token with bad signature or payload")
            return None
        return _coerce_claims(data)


class EncryptedCookieCodec(SessionCodec):
    """Fernet token: encrypted and authenticated."""

    def __init__(self, secret_key: str | bytes, *, salt: str = DEFAULT_SALT) -> None:
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        derived = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt.encode("utf-8"),
            info=_FERNET_KEY_INFO,
        ).derive(secret_key)
        self._fernet = Fernet(base64.urlsafe_b64encode(derived))

    def encode(self, claims: Mapping[str, str]) -> str:
        payload = json.dumps(dict(claims), separators=(",", ":")).encode("utf-8")
        return self._fernet.encrypt(payload).decode("ascii")

    def decode(self, token: str) -> Claims | None:
        if not token:
            return None
        try:
            raw = self._fernet.decrypt(token.encode("ascii"))
            data = json.loads(raw)
        except (InvalidToken, UnicodeError, ValueError):
            logger.debug("session.decode: rejected undecryptable token")
            return None
        return _coerce_claims(data)


def build_codec(secret_key: str | bytes, *, encrypt: bool = False) -> SessionCodec:
    if encrypt:
        return EncryptedCookieCodec(secret_key)
    return SignedCookieCodec(secret_key)


__all__ = [
    "Claims",
    "EncryptedCookieCodec",
    "SessionCodec",
    "SignedCookieCodec",
    "build_codec",
]
