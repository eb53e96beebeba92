import uuid

from app.dealerscope.middleware.trace import resolve_trace_id


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["trace_id"]


def test_health_echoes_trace_header(client):
    response = client.get("/health", headers={"X-Trace-ID": "trace-abc"})
    assert response.headers["X-Trace-ID"] == "trace-abc"
    assert response.json()["trace_id"] == "trace-abc"


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ready"
    assert payload["trace_id"]


def test_malformed_trace_header_is_replaced(client):
    response = client.get("/health", headers={"X-Trace-ID": "bad trace {id}"})
    trace_id = response.headers["X-Trace-ID"]
    assert trace_id != "bad trace {id}"
    assert str(uuid.UUID(trace_id)) == trace_id
    assert response.json()["trace_id"] == trace_id


def test_resolve_trace_id():
    assert resolve_trace_id("svc-1:req.42") == "svc-1:req.42"
    assert resolve_trace_id("  padded  ") == "padded"
    assert resolve_trace_id("x" * 129) != "x" * 129
    assert uuid.UUID(resolve_trace_id(None))
