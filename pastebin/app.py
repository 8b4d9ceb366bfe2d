# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, jsonify
from flask_cors import CORS

from pastebin.infrastructure.container import Container
from pastebin.shared.config import AppConfig, load_config
from pastebin.shared.errors import register_error_handler
from pastebin.shared.logging import logger, setup_logging
from pastebin.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)
    setup_logging(config.log_level)

    app = Flask(__name__)
    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.user_controller.as_blueprint())
    app.register_blueprint(container.paste_controller.as_blueprint())

    @app.get("/api/health")
    def health():
        container.ping()
        return jsonify({"ok": True, "storage": config.storage_backend})

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    app.extensions["pastebin.container"] = container
    logger.info(f"Flask app initialized storage={config.storage_backend}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
