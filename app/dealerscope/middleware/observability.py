from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.dealerscope.core.db_timing import db_timer, get_db_time_ms
from app.dealerscope.core.logging import log_json

logger = logging.getLogger("dealerscope.request")

# Path parameters worth correlating across request lines.
_SCOPE_PATH_PARAMS = ("store_id", "department_id", "kpi_id", "todo_id")


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def build_request_log_payload(
    *,
    request: Request,
    response: Response | None,
    latency_ms: float,
    db_time_ms: float | None,
) -> dict:
    state = request.state
    path_params = request.scope.get("path_params") or {}
    payload = {
        "event": "http_request",
        "trace_id": getattr(state, "trace_id", ""),
        "user_id": getattr(state, "user_id", None),
        "role": getattr(state, "role", None),
        "store_id": getattr(state, "store_id", None),
        "route": _route_template(request),
        "method": request.method,
        "status_code": response.status_code if response is not None else 500,
        "latency_ms": round(latency_ms, 2),
        "db_time_ms": None if db_time_ms is None else round(db_time_ms, 2),
        "error_code": getattr(state, "error_code", None),
        "error_class": getattr(state, "error_class", None),
    }
    payload["target"] = {name: path_params[name] for name in _SCOPE_PATH_PARAMS if name in path_params} or None
    return payload


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response: Response | None = None
        with db_timer():
            try:
                response = await call_next(request)
                return response
            finally:
                payload = build_request_log_payload(
                    request=request,
                    response=response,
                    latency_ms=(time.perf_counter() - started) * 1000,
                    db_time_ms=get_db_time_ms(),
                )
                level = logging.WARNING if payload["status_code"] >= 500 else logging.INFO
                log_json(logger, payload, level=level)
