"""
Utility helpers: directory setup, logging config, and time utils.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime, timezone
from flask import Flask

# Loggers that share the app's handlers: the app itself plus the libraries it wires.
LOGGER_NAMES = ("sensorlog", "packet_log", "inference")


def ensure_dirs(*paths: Path) -> None:
    """Ensure each directory exists."""
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def init_logging(app: Flask) -> logging.Logger:
    """Configure a console logger + rotating file handler."""
    log_level = getattr(logging, app.config["LOG_LEVEL"].upper(), logging.INFO)
    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(fmt)

    # File (rotating)
    log_file = Path(app.config["LOG_FILE"])
    ensure_dirs(log_file.parent)
    fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
    fh.setLevel(log_level)
    fh.setFormatter(fmt)

    for name in LOGGER_NAMES:
        lg = logging.getLogger(name)
        lg.setLevel(log_level)
        lg.propagate = False  # avoid duplicate logs if root has handlers
        for old in list(lg.handlers):  # app factory may run more than once (tests)
            lg.removeHandler(old)
            old.close()
        lg.addHandler(ch)
        lg.addHandler(fh)

    logger = logging.getLogger("sensorlog")
    if app.config["SECRET_KEY"] == "dev-unsafe-change-this":
        logger.warning("Using default SECRET_KEY. Set FLASK_SECRET_KEY for production.")

    return logger


def utcnow_iso() -> str:
    """Return current UTC timestamp in RFC3339-ish ISO format."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
