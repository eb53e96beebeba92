from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    INVALID_TOKEN = ErrorDefinition("INVALID_TOKEN", "Invalid token", status.HTTP_401_UNAUTHORIZED)
    INVALID_CREDENTIALS = ErrorDefinition(
        "INVALID_CREDENTIALS",
        "Invalid credentials",
        status.HTTP_401_UNAUTHORIZED,
    )
    USER_INACTIVE = ErrorDefinition(
        "USER_INACTIVE",
        "User is inactive",
        status.HTTP_403_FORBIDDEN,
    )
    PROFILE_NOT_FOUND = ErrorDefinition(
        "PROFILE_NOT_FOUND",
        "Profile not found",
        status.HTTP_404_NOT_FOUND,
    )
    STORE_SCOPE_MISMATCH = ErrorDefinition(
        "STORE_SCOPE_MISMATCH",
        "Store is outside the user's access scope",
        status.HTTP_403_FORBIDDEN,
    )
    DEPARTMENT_SCOPE_MISMATCH = ErrorDefinition(
        "DEPARTMENT_SCOPE_MISMATCH",
        "Department is outside the user's access scope",
        status.HTTP_403_FORBIDDEN,
    )
    KPI_NOT_FOUND = ErrorDefinition(
        "KPI_NOT_FOUND",
        "KPI definition not found",
        status.HTTP_404_NOT_FOUND,
    )
    TODO_NOT_FOUND = ErrorDefinition(
        "TODO_NOT_FOUND",
        "To-do not found",
        status.HTTP_404_NOT_FOUND,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)
