"""End-to-end behaviour of the HTTP surface (Flask test client)."""
from inference import RawResult

from tests.conftest import forward_error


def test_health_is_independent_of_state(client):
    for path in ("/health", "/healthz"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok"}


def test_session_control_errors(client):
    resp = client.post("/session/stop")
    assert resp.status_code == 409
    assert resp.get_json()["success"] is False

    assert client.post("/session/start").status_code == 200
    resp = client.post("/session/start")
    assert resp.status_code == 409
    assert "already" in resp.get_json()["error"]


def test_ingest_while_idle_is_rejected(client):
    resp = client.post("/data", data=b"t,v\n1,10\n")
    assert resp.status_code == 409


def test_poll_while_idle_has_no_content(client):
    assert client.get("/data").status_code == 204


def test_full_session_flow(client, fake_client):
    resp = client.post("/session/start")
    assert resp.get_json()["start_index"] == 0

    resp = client.post("/data", data=b"t,v\n1,10\n2,20\n", content_type="text/csv")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True, "index": 0, "accepted": 2, "dropped": 0, "buffer_full": False,
    }
    resp = client.post("/data", data=b"t,v\n2,20\n3,30\n", content_type="text/csv")
    assert resp.get_json()["dropped"] == 1

    polled = client.get("/data")
    assert polled.status_code == 200
    assert polled.headers["X-Sequence-Index"] == "0"
    assert polled.headers["X-Buffer-Full"] == "false"
    assert polled.get_data(as_text=True) == "t,v\n1,10\n2,20\n"
    assert client.get("/data").get_data(as_text=True) == "t,v\n3,30\n"
    assert client.get("/data").status_code == 204

    resp = client.post("/session/stop")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["session"] == {"start_index": 0, "end_index": 2, "packets": 2}
    assert body["result"] == {"kind": "structured", "value": {"label": "ok"}}
    assert fake_client.calls == ["t,v\n1,10\n2,20\n3,30\n"]

    status = client.get("/session/status").get_json()
    assert status["session"]["active"] is False
    assert status["forwarding"]["result"] == {"kind": "structured", "value": {"label": "ok"}}


def test_empty_session_returns_explicit_empty_result(client, fake_client):
    client.post("/session/start")
    resp = client.post("/session/stop")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["result"] is None
    assert body["message"] == "No data collected"
    assert body["session"]["packets"] == 0
    assert fake_client.calls == []


def test_raw_result_passthrough(client, fake_client):
    fake_client.result = RawResult("standing")
    client.post("/session/start")
    client.post("/data", data=b"t,v\n1,10\n")
    body = client.post("/session/stop").get_json()
    assert body["result"] == {"kind": "raw", "text": "standing"}


def test_forward_failure_reports_error_and_keeps_session_closed(client, fake_client):
    fake_client.error = forward_error(503)
    client.post("/session/start")
    client.post("/data", data=b"t,v\n1,10\n")

    resp = client.post("/session/stop")
    body = resp.get_json()
    assert resp.status_code == 500
    assert body["success"] is False
    assert body["status"] == 503

    assert client.get("/session/status").get_json()["session"]["active"] is False
    assert client.post("/session/start").status_code == 200


def test_invalid_encoding_is_bad_request(client):
    client.post("/session/start")
    resp = client.post("/data", data=b"t,v\n\xff\xfe\n")
    assert resp.status_code == 400
    assert client.get("/session/status").get_json()["session"]["write_cursor"] == 0


def test_buffer_full_is_a_capacity_signal(client):
    client.post("/session/start")
    for ts in (1, 2, 3):
        resp = client.post("/data", data=f"t,v\n{ts},0\n".encode())
        assert resp.status_code == 200
    assert resp.get_json()["buffer_full"] is True

    resp = client.post("/data", data=b"t,v\n4,0\n")
    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "1"
    assert resp.get_json()["buffer_full"] is True

    client.get("/data")
    client.get("/data")
    last = client.get("/data")
    assert last.headers["X-Buffer-Full"] == "true"


def test_master_record_download(client):
    assert client.get("/data/master").status_code == 404
    client.post("/session/start")
    client.post("/data", data=b"t,v\n1,10\n")
    client.post("/data", data=b"t,v\n2,20\n")
    resp = client.get("/data/master")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "t,v\n1,10\n2,20\n"
    resp.close()


def test_payload_limit(app, client):
    app.config["MAX_CONTENT_LENGTH"] = 16
    client.post("/session/start")
    resp = client.post("/data", data=b"t,v\n" + b"1,10\n" * 10)
    assert resp.status_code == 413
    assert resp.get_json()["success"] is False
