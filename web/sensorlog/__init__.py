"""
Flask app factory: registers config, logging, shared state, blueprints, and error handlers.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Type

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from inference import InferenceClient, load_settings
from packet_log import SessionLog, SessionLogConfig
from sensorlog.config import Config, DevelopmentConfig, ProductionConfig
from sensorlog.utils import ensure_dirs, init_logging
from sensorlog.managers.forwarding_manager import ForwardingManager
from sensorlog.routes import ingest as ingest_bp
from sensorlog.routes import poll as poll_bp
from sensorlog.routes import session as session_bp


def create_app(config_class: Type[Config] | None = None, **overrides) -> Flask:
    """
    Create and configure the Flask application.

    `overrides` are applied on top of the config class (handy for tests,
    e.g. DATA_FOLDER=tmp_path).
    """
    app = Flask(__name__)

    # Config selection
    cfg: Type[Config]
    env = os.getenv("FLASK_ENV", "production").lower()
    if config_class is not None:
        cfg = config_class
    elif env.startswith("dev"):
        cfg = DevelopmentConfig
    else:
        cfg = ProductionConfig
    app.config.from_object(cfg)
    app.config.update(overrides)

    # Ensure folders
    data_dir = Path(app.config["DATA_FOLDER"])
    log_dir = Path(app.config["LOG_FOLDER"])
    ensure_dirs(data_dir, log_dir)

    app.secret_key = app.config["SECRET_KEY"]

    # Logging
    logger = init_logging(app)
    app.logger = logger  # align Flask's logger with ours

    # Process-wide packet log; cleared once per process start
    session_log = SessionLog(
        SessionLogConfig(data_dir=data_dir, max_samples=app.config["MAX_SAMPLES"])
    )
    session_log.reset()
    app.extensions["session_log"] = session_log

    # Inference client: YAML file first, then non-empty env overrides
    settings = load_settings(
        app.config.get("INFERENCE_CONFIG"),
        {
            "url": app.config.get("INFERENCE_URL"),
            "field": app.config.get("INFERENCE_FIELD"),
            "encoding": app.config.get("INFERENCE_ENCODING"),
            "timeout": app.config.get("INFERENCE_TIMEOUT"),
        },
    )
    client = app.config.get("INFERENCE_CLIENT") or InferenceClient(settings)
    app.extensions["forward_mgr"] = ForwardingManager(
        logger=logger,
        log_dir=log_dir,
        store=session_log.store,
        client=client,
        max_workers=app.config["FORWARD_WORKERS"],
    )
    logger.info(
        "Packet log ready in %s (max_samples=%d, inference=%s)",
        data_dir, app.config["MAX_SAMPLES"], client.settings.url,
    )

    # Error handlers
    @app.errorhandler(RequestEntityTooLarge)
    def handle_payload_too_large(_e):
        return jsonify({"success": False, "error": "Payload too large"}), 413

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e: Exception):
        app.logger.exception("Unhandled error")
        return jsonify({"success": False, "error": "Internal server error"}), 500

    # Blueprints
    app.register_blueprint(ingest_bp.bp)
    app.register_blueprint(poll_bp.bp)
    app.register_blueprint(session_bp.bp)

    # Health
    @app.route("/health")
    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

    return app
