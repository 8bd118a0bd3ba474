# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, request
from werkzeug.exceptions import HTTPException

from authportal.shared.logging import logger

from .base import AppError, InfrastructureError

INTERNAL_ERROR_BODY = "Internal Server Error"


def internal_error_response(status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR) -> Response:
    return Response(INTERNAL_ERROR_BODY, status=status, mimetype="text/plain")


def handle_app_error(error: AppError) -> Response:
    if isinstance(error, InfrastructureError):
        logger.error(
            f"{error.code} on {request.method} {request.path}: context={dict(error.context or {})}"
        )
        return internal_error_response(error.status)
    # Domain errors are handled inline by controllers; reaching here is a wiring bug.
    logger.warning(f"Unhandled domain error {error.code} on {request.method} {request.path}")
    return Response(error.message or error.code, status=error.status, mimetype="text/plain")


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"query={dict(request.args)}, body_size={len(request.get_data(cache=True))}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")
        return internal_error_response()
