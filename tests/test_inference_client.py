import pytest
import requests

from inference import (
    ForwardError,
    InferenceClient,
    InferenceSettings,
    RawResult,
    StructuredResult,
    load_settings,
)
from inference.utils.response import NO_JSON, extract_json


class _Resp:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class _Http:
    """Minimal stand-in for requests.Session."""

    def __init__(self, resp=None, exc=None):
        self.resp = resp
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.resp

    def close(self):
        pass


def _client(http, **settings):
    return InferenceClient(InferenceSettings(url="http://model.test/predict", **settings), session=http)


def test_json_response_is_structured():
    http = _Http(_Resp(text='{"label": "walking", "confidence": 0.93}'))
    result = _client(http).submit("t,v\n1,10\n")
    assert result == StructuredResult({"label": "walking", "confidence": 0.93})
    assert result.to_dict() == {"kind": "structured", "value": {"label": "walking", "confidence": 0.93}}

    url, kwargs = http.calls[0]
    assert url == "http://model.test/predict"
    assert kwargs["json"] == {"data": "t,v\n1,10\n"}
    assert kwargs["timeout"] == 30.0


def test_plain_text_response_falls_back_to_raw():
    http = _Http(_Resp(text="walking"))
    result = _client(http).submit("t,v\n1,10\n")
    assert isinstance(result, RawResult)
    assert result.to_dict() == {"kind": "raw", "text": "walking"}


def test_form_encoding_and_custom_field():
    http = _Http(_Resp(text="ok"))
    _client(http, field="csv", encoding="form").submit("t,v\n")
    _, kwargs = http.calls[0]
    assert kwargs["data"] == {"csv": "t,v\n"}
    assert "json" not in kwargs


def test_error_status_raises_forward_error():
    http = _Http(_Resp(status_code=503, text="model warming up", reason="Service Unavailable"))
    with pytest.raises(ForwardError) as exc:
        _client(http).submit("t,v\n1,10\n")
    assert exc.value.status == 503
    assert "model warming up" in str(exc.value)


def test_timeout_and_transport_errors_raise_forward_error():
    with pytest.raises(ForwardError) as exc:
        _client(_Http(exc=requests.Timeout("slow"))).submit("x\n")
    assert exc.value.status is None
    assert "timed out" in str(exc.value)

    with pytest.raises(ForwardError):
        _client(_Http(exc=requests.ConnectionError("refused"))).submit("x\n")


def test_extract_json_variants():
    assert extract_json('[1, 2]') == [1, 2]
    assert extract_json('null') is None
    assert extract_json('Result:\n```json\n{"a": 1}\n```') == {"a": 1}
    assert extract_json("not json") is NO_JSON
    assert extract_json("") is NO_JSON


def test_load_settings_from_yaml_with_overrides(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "inference:\n  url: http://yaml.test/run\n  field: csv\n  timeout: 12\n",
        encoding="utf-8",
    )
    s = load_settings(cfg, {"url": "", "timeout": "4.5", "encoding": None})
    assert s.url == "http://yaml.test/run"
    assert s.field == "csv"
    assert s.timeout == 4.5
    assert s.encoding == "json"


def test_load_settings_without_file_uses_defaults(tmp_path):
    s = load_settings(tmp_path / "missing.yaml")
    assert s == InferenceSettings()
