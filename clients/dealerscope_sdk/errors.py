from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

NETWORK_ERROR = "NETWORK_ERROR"
SCOPE_DENIAL_CODES = frozenset({"STORE_SCOPE_MISMATCH", "DEPARTMENT_SCOPE_MISMATCH"})


@dataclass
class ApiError(Exception):
    """Error envelope returned by the DealerScope API, or a transport failure mapped onto it."""

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def retryable(self) -> bool:
        if self.code == NETWORK_ERROR:
            return True
        return bool(self.status_code and 500 <= self.status_code <= 599)

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code == 401

    @property
    def is_scope_denial(self) -> bool:
        return self.code in SCOPE_DENIAL_CODES

    @classmethod
    def network(cls, details: str) -> "ApiError":
        return cls(code=NETWORK_ERROR, message="Network error while calling DealerScope API", details=details)

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        fallback_message = response.text or f"HTTP {response.status_code}"
        trace_id = response.headers.get("X-Trace-ID")
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return cls(
                code="HTTP_ERROR",
                message=fallback_message,
                details=payload,
                trace_id=trace_id,
                status_code=response.status_code,
            )
        return cls(
            code=str(payload.get("code") or "HTTP_ERROR"),
            message=str(payload.get("message") or fallback_message),
            details=payload.get("details"),
            trace_id=payload.get("trace_id") or trace_id,
            status_code=response.status_code,
        )
