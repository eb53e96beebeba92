from clients.dealerscope_dashboard.infrastructure.errors.error_mapper import ErrorMapper
from clients.dealerscope_sdk.errors import ApiError


def test_known_code_gets_friendly_message() -> None:
    error = ApiError(code="STORE_SCOPE_MISMATCH", message="raw", status_code=403, trace_id="t-1")

    payload = ErrorMapper.to_payload(error)

    assert payload["code"] == "STORE_SCOPE_MISMATCH"
    assert payload["message"] == "That store is outside your access."
    assert payload["suggestion"] == "Pick a store from the list."
    assert payload["trace_id"] == "t-1"


def test_unknown_server_error_maps_to_internal() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="BAD_GATEWAY", message="upstream", status_code=502))

    assert payload["code"] == "INTERNAL_ERROR"


def test_unknown_client_error_keeps_its_code() -> None:
    error = ApiError(code="NOT_FOUND", message="Not Found", status_code=404, details={"path": "/x"})

    payload = ErrorMapper.to_payload(error)

    assert payload["code"] == "NOT_FOUND"
    assert payload["message"] == "Not Found"
    assert payload["details"] == {"path": "/x"}


def test_plain_exception() -> None:
    payload = ErrorMapper.to_payload(RuntimeError("boom"))

    assert payload["code"] == "INTERNAL_ERROR"
    assert payload["message"] == "boom"
    assert payload["retryable"] is True
    assert payload["trace_id"] is None


def test_unknown_unauthorized_maps_to_invalid_token() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="HTTP_ERROR", message="raw", status_code=401, trace_id="t-7"))

    assert payload["code"] == "INVALID_TOKEN"
    assert payload["message"] == "Your session has expired."
    assert payload["trace_id"] == "t-7"
    assert payload["retryable"] is False


def test_payload_flags_retry_and_scope_denial() -> None:
    denied = ErrorMapper.to_payload(ApiError(code="DEPARTMENT_SCOPE_MISMATCH", message="raw", status_code=403))
    network = ErrorMapper.to_payload(ApiError.network("connection refused"))

    assert denied["scope_denial"] is True
    assert denied["retryable"] is False
    assert network["code"] == "NETWORK_ERROR"
    assert network["retryable"] is True
    assert network["scope_denial"] is False
