# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from staffauth.container import Container
from staffauth.shared.errors import register_error_handler
from staffauth.shared.logging import logger, setup_logging
from staffauth.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    if container is None:
        from staffauth.infrastructure.db import init_db

        init_db()
        container = Container()

    config = container.config
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    app.extensions["staffauth.container"] = container
    register_error_handler(app)
    configure_request_logging(app, debug_mode=config.debug_logging)

    # Resolving the controller builds the token issuer, so missing auth
    # settings fail here rather than on the first request.
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
