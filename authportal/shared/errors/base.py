# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """User-correctable failure; the controller shows ``message`` next to the form."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(HTTPStatus, getattr(self, "status", HTTPStatus.OK))
        resolved_message = message or cast("str | None", getattr(self, "message", None))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class InfrastructureError(AppError):
    """Failure of a collaborator; never shown to the client in detail."""

    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context, message=message)


class ValidationError(DomainError):
    code = "validation_error"

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message=message, context=context)


class StoreError(InfrastructureError):
    def __init__(self, operation: str, *, detail: str | None = None) -> None:
        context: dict[str, Any] = {"operation": operation}
        if detail:
            context["detail"] = detail
        super().__init__("store_error", context=context)


class RenderError(InfrastructureError):
    def __init__(self, view: str, *, detail: str | None = None) -> None:
        context: dict[str, Any] = {"view": view}
        if detail:
            context["detail"] = detail
        super().__init__("render_error", context=context)


class HashError(InfrastructureError):
    def __init__(self, detail: str) -> None:
        super().__init__("hash_error", context={"detail": detail})
