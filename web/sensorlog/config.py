"""
Configuration objects for the Flask application.

Override via environment variables or a .env file (when using python-dotenv).
"""

from __future__ import annotations
import os


class Config:
    """Base configuration (safe defaults)."""

    # Security
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-unsafe-change-this")

    # Storage
    DATA_FOLDER = os.getenv("DATA_FOLDER", "data")
    LOG_FOLDER = os.getenv("LOG_FOLDER", "logs")

    # Requests / uploads
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(20 * 1024 * 1024)))  # 20 MiB

    # Session capacity
    MAX_SAMPLES = int(os.getenv("MAX_SAMPLES", "1000"))
    RETRY_AFTER_SECONDS = int(os.getenv("RETRY_AFTER_SECONDS", "1"))

    # Logging
    LOG_FILE = os.getenv("APP_LOG_FILE", "logs/app.log")
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")

    # Inference collaborator (env values override the YAML file)
    INFERENCE_CONFIG = os.getenv("INFERENCE_CONFIG", "inference/config.yaml")
    INFERENCE_URL = os.getenv("INFERENCE_URL", "")
    INFERENCE_FIELD = os.getenv("INFERENCE_FIELD", "")
    INFERENCE_ENCODING = os.getenv("INFERENCE_ENCODING", "")
    INFERENCE_TIMEOUT = os.getenv("INFERENCE_TIMEOUT", "")
    FORWARD_WORKERS = int(os.getenv("FORWARD_WORKERS", "2"))

    # Dev server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "6000"))


class ProductionConfig(Config):
    """Production overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Used by the test suite; paths are normally replaced per test."""
    TESTING = True
    SECRET_KEY = "testing"
    LOG_LEVEL = "DEBUG"
    MAX_SAMPLES = 1000
