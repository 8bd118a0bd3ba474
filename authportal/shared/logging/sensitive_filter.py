# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrubs credentials out of log lines before any sink sees them."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, flags), replacement)
    for pattern, replacement, flags in (
        # Form fields and config values
        (r"\b((?:password|password_confirm|pwd)['\"]?\s*[:=]\s*['\"]?)([^'\",\s}]+)", rf"\1{_REDACTED}", re.I),
        (r"\b((?:session[_-]?secret|secret[_-]?key)['\"]?\s*[:=]\s*['\"]?)([^'\",\s}]+)", rf"\1{_REDACTED}", re.I),
        # werkzeug "method$salt$digest"
        (r"\b((?:scrypt|pbkdf2):[\w:]+)\$[^$\s'\"]+\$[0-9a-f]+\b", rf"\1${_REDACTED}", 0),
        # Session cookie values and Authorization headers
        (r"(\b\w*session\w*=)([\w\-.=]{10,})", rf"\1{_REDACTED}", re.I),
        (r"(authorization\s*:\s*['\"]?)([^'\"]{10,})", rf"\1{_REDACTED}", re.I),
        # Database URLs with credentials
        (r"\b([a-z][a-z0-9+]*://[^:/@\s]+):[^@\s]+@", rf"\1:{_REDACTED}@", re.I),
        # Email local part
        (r"\b[\w.%+\-]+@((?:[\w\-]+\.)+[a-zA-Z]{2,})\b", r"***@\1", 0),
    )
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: rewrites the message in place and never drops the record."""
    message = record.get("message")
    if message:
        record["message"] = sanitize_message(message)
    return True


__all__ = ["sanitize_message", "sanitize_record"]
