import json
import logging
from types import SimpleNamespace

from starlette.requests import Request
from starlette.responses import Response

from app.dealerscope.middleware.observability import build_request_log_payload
from tests.scope_helpers import auth_headers, create_department, create_group, create_store, create_user


def test_build_request_log_payload():
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/dealerscope/departments/abc/kpis",
        "headers": [],
        "route": SimpleNamespace(path="/dealerscope/departments/{department_id}/kpis"),
    }
    request = Request(scope)
    request.state.trace_id = "trace-1"
    request.state.user_id = "user-1"
    request.state.store_id = "store-1"
    request.state.error_code = None
    response = Response(status_code=200)

    payload = build_request_log_payload(
        request=request,
        response=response,
        latency_ms=12.3456,
        db_time_ms=4.5678,
    )

    assert payload["event"] == "http_request"
    assert payload["trace_id"] == "trace-1"
    assert payload["user_id"] == "user-1"
    assert payload["store_id"] == "store-1"
    assert payload["route"] == "/dealerscope/departments/{department_id}/kpis"
    assert payload["status_code"] == 200
    assert payload["latency_ms"] == 12.35
    assert payload["db_time_ms"] == 4.57


def test_request_log_line_emitted(client, caplog):
    with caplog.at_level(logging.INFO, logger="dealerscope.request"):
        client.get("/health", headers={"X-Trace-ID": "trace-log"})

    lines = [json.loads(record.getMessage()) for record in caplog.records if record.name == "dealerscope.request"]
    assert any(line["trace_id"] == "trace-log" and line["status_code"] == 200 for line in lines)


def test_request_log_line_names_scope_target(client, db_session, caplog):
    group = create_group(db_session)
    store = create_store(db_session, "North", group=group)
    department = create_department(db_session, store, "Service")
    user = create_user(db_session, role="store_gm", store=store, group=group, email="gm-log@example.com")

    with caplog.at_level(logging.INFO, logger="dealerscope.request"):
        response = client.get(f"/dealerscope/departments/{department.id}/todo-counts", headers=auth_headers(user))
    assert response.status_code == 200

    lines = [json.loads(record.getMessage()) for record in caplog.records if record.name == "dealerscope.request"]
    line = lines[-1]
    assert line["route"] == "/dealerscope/departments/{department_id}/todo-counts"
    assert line["target"] == {"department_id": str(department.id)}
    assert line["user_id"] == str(user.id)
    assert line["role"] == "store_gm"
