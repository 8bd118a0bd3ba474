# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os

from flask import Flask

from authportal.container import Container
from authportal.shared.config import AppConfig, load_config
from authportal.shared.logging import logger, setup_logging
from authportal.shared.middleware.error_handler import configure_error_handling
from authportal.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    if container is None:
        container = Container(config or load_config())
    config = container.config

    setup_logging(config.log_level, debug_mode=config.debug_logging)
    container.database.init_db()

    app = Flask(__name__)
    app.extensions["authportal.container"] = container
    # Cookie name, Secure and SameSite come from SecurityConfig through the interface
    app.session_interface = container.session_interface

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.dashboard_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    host = os.getenv("AUTHPORTAL_HOST", "127.0.0.1")
    port = int(os.getenv("AUTHPORTAL_PORT", "8080"))
    create_app().run(host=host, port=port, threaded=True)
