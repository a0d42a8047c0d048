"""Application exception types and the terminal error normalizer."""

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.repositories.errors import (
    DocumentValidationError,
    DuplicateKeyError,
    InvalidFilterError,
    InvalidIdError,
    format_validation_errors,
)
from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to the error envelope."""

    def __init__(self, status_code: int, code: str, message: str | list[str]) -> None:
        self.status_code = status_code
        self.code = code
        self.payload = ErrorResponse(error=message)
        super().__init__(message if isinstance(message, str) else "; ".join(message))


def not_found(resource: str, resource_id: str) -> ApiError:
    return ApiError(status_code=404, code="NOT_FOUND", message=f"{resource} not found with id {resource_id}")


def unauthenticated(message: str = "Not authorized to access this route") -> ApiError:
    return ApiError(status_code=401, code="UNAUTHENTICATED", message=message)


def forbidden(message: str) -> ApiError:
    return ApiError(status_code=403, code="FORBIDDEN", message=message)


def normalize_error(exc: Exception) -> ApiError:
    """Map any failure to exactly one ``ApiError``.

    This is the only place where storage and framework errors are translated
    into status codes; services and routes let them propagate untouched.
    """
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, InvalidIdError):
        return ApiError(status_code=404, code="NOT_FOUND", message=f"Resource not found with id {exc.value}")
    if isinstance(exc, DuplicateKeyError):
        return ApiError(status_code=400, code="DUPLICATE_KEY", message="Duplicate field entered")
    if isinstance(exc, DocumentValidationError):
        return ApiError(status_code=400, code="VALIDATION_FAILED", message=exc.messages)
    if isinstance(exc, RequestValidationError):
        return ApiError(
            status_code=400,
            code="VALIDATION_FAILED",
            message=format_validation_errors(list(exc.errors())),
        )
    if isinstance(exc, InvalidFilterError):
        return ApiError(status_code=400, code="BAD_REQUEST", message=str(exc))
    if isinstance(exc, StarletteHTTPException):
        return ApiError(status_code=exc.status_code, code="HTTP_ERROR", message=str(exc.detail))
    return ApiError(status_code=500, code="SERVER_ERROR", message=str(exc) or "Server error")


__all__ = ["ApiError", "forbidden", "normalize_error", "not_found", "unauthenticated"]
