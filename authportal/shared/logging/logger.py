"""Structured logging utilities."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

# Chatty third-party loggers and the level they are capped at
_QUIET_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


class _InterceptHandler(logging.Handler):
    """Forwards stdlib records (werkzeug, SQLAlchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(correlation_id=_CORRELATION_ID.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that injects correlation ids via ContextVar."""

    def __getattr__(self, name):  # pragma: no cover
        bound = _logger.bind(correlation_id=_CORRELATION_ID.get())
        return getattr(bound, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def _sink_options(level: str) -> dict[str, Any]:
    return {
        "level": level,
        "format": _FMT,
        "backtrace": False,
        "diagnose": False,
        "filter": sanitize_record,
    }


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """Route loguru and stdlib logging to stderr, plus ``LOG_FILE`` when set.

    ``debug_mode`` forces DEBUG regardless of ``level``. Every sink runs
    :func:`sanitize_record` so passwords, hashes and session tokens never
    reach disk.
    """
    resolved = "DEBUG" if debug_mode else (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    _logger.configure(extra={"correlation_id": "-"})
    _logger.add(sys.stderr, colorize=True, **_sink_options(resolved))

    log_file = os.getenv("LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _logger.add(log_file, colorize=False, enqueue=True, encoding="utf-8", **_sink_options(resolved))

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, cap in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
