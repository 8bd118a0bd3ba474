# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .codec import EncryptedCookieCodec, SessionCodec, SignedCookieCodec, build_codec
from .interface import ClaimsSession, ClaimsSessionInterface
from .manager import IDENTITY_CLAIM, SessionManager

__all__ = [
    "ClaimsSession",
    "ClaimsSessionInterface",
    "EncryptedCookieCodec",
    "IDENTITY_CLAIM",
    "SessionCodec",
    "SessionManager",
    "SignedCookieCodec",
    "build_codec",
]
