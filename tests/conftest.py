import threading

import pytest

from inference import ForwardError, InferenceSettings, StructuredResult
from packet_log import FilesystemPacketStore, SessionLog, SessionLogConfig
from sensorlog import create_app
from sensorlog.config import TestingConfig


class FakeInferenceClient:
    """Stands in for InferenceClient; records every submitted payload."""

    def __init__(self, result=None, error=None, delay=None):
        self.settings = InferenceSettings(url="http://inference.test/predict", timeout=5)
        self.result = result if result is not None else StructuredResult({"label": "ok"})
        self.error = error
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def submit(self, text):
        with self._lock:
            self.calls.append(text)
        if self.delay:
            self.delay.wait()
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def log_config(tmp_path):
    return SessionLogConfig(data_dir=tmp_path / "data", max_samples=1000)


@pytest.fixture
def store(log_config):
    s = FilesystemPacketStore.from_config(log_config)
    s.reset()
    return s


@pytest.fixture
def session_log(log_config):
    log = SessionLog(log_config)
    log.reset()
    return log


@pytest.fixture
def fake_client():
    return FakeInferenceClient()


@pytest.fixture
def app(tmp_path, fake_client):
    app = create_app(
        TestingConfig,
        DATA_FOLDER=str(tmp_path / "data"),
        LOG_FOLDER=str(tmp_path / "logs"),
        LOG_FILE=str(tmp_path / "logs" / "app.log"),
        INFERENCE_CONFIG="",
        INFERENCE_CLIENT=fake_client,
        MAX_SAMPLES=3,
    )
    yield app
    app.extensions["forward_mgr"].shutdown(wait=True)


@pytest.fixture
def client(app):
    return app.test_client()


def forward_error(status=503):
    return ForwardError("model unavailable", status=status)
