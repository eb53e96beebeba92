from clients.dealerscope_sdk.errors import ApiError

_RETRY_LATER = "Retry in a few seconds."
_SHARE_TRACE = "Retry and share the trace_id if it persists."


class ErrorMapper:
    """Turns SDK and unexpected errors into the notice payload shown on the dashboard."""

    _KNOWN_CODES = {
        "INVALID_TOKEN": ("Your session has expired.", "Sign in again to continue."),
        "USER_INACTIVE": ("This account is inactive.", "Ask an administrator to reactivate it."),
        "PROFILE_NOT_FOUND": ("Your profile could not be loaded.", "Retry, or sign out and sign in again."),
        "PROFILE_MISMATCH": ("The loaded profile belongs to another user.", "Sign out and sign in again."),
        "SESSION_REQUIRED": ("You are not signed in.", "Sign in to continue."),
        "STORE_SCOPE_MISMATCH": ("That store is outside your access.", "Pick a store from the list."),
        "DEPARTMENT_SCOPE_MISMATCH": ("That department is outside your access.", "Pick a department from the list."),
        "VALIDATION_ERROR": ("The request was rejected as invalid.", "Check the selected period and try again."),
        "DB_UNAVAILABLE": ("The service is temporarily unavailable.", _RETRY_LATER),
        "INTERNAL_ERROR": ("Unexpected server error.", _SHARE_TRACE),
        "NETWORK_ERROR": ("The API could not be reached.", "Check your connection and retry."),
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if not isinstance(error, ApiError):
            return {
                "code": "INTERNAL_ERROR",
                "message": str(error),
                "details": None,
                "trace_id": None,
                "suggestion": "Retry and report the incident if it persists.",
                "retryable": True,
                "scope_denial": False,
            }

        code = error.code
        if code in cls._KNOWN_CODES:
            message, suggestion = cls._KNOWN_CODES[code]
        elif error.is_auth_failure:
            code = "INVALID_TOKEN"
            message, suggestion = cls._KNOWN_CODES[code]
        elif error.retryable:
            code = "INTERNAL_ERROR"
            message, suggestion = cls._KNOWN_CODES[code]
        else:
            message, suggestion = error.message, "Contact support with the trace_id."
        return {
            "code": code,
            "message": message,
            "details": error.details,
            "trace_id": error.trace_id,
            "suggestion": suggestion,
            "retryable": error.retryable,
            "scope_denial": error.is_scope_denial,
        }
