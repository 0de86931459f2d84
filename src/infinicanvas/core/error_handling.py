"""Exception handlers for the infinicanvas HTTP host.

Every error becomes a JSON body of the same shape, carrying the request's
correlation id when one is bound.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

if TYPE_CHECKING:
    from litestar import Request
    from litestar.exceptions import HTTPException, ValidationException

logger = structlog.get_logger(__name__)


@dataclass
class ErrorDetail:
    """Details about a specific error."""

    field: str | None = None
    message: str = ""
    code: str = "error"


@dataclass
class ErrorResponse:
    """Structured error response format."""

    status: str = "error"
    message: str = ""
    code: str = "internal_error"
    correlation_id: str | None = None
    details: list[ErrorDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {
            "status": self.status,
            "message": self.message,
            "code": self.code,
        }
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        if self.details:
            result["details"] = [{"field": d.field, "message": d.message, "code": d.code} for d in self.details]
        return result


def get_correlation_id(request: Request) -> str | None:
    """Extract the correlation id from request state or headers."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def _error(request: Request, status_code: int, response: ErrorResponse) -> Response[dict[str, Any]]:
    response.correlation_id = get_correlation_id(request)
    return Response(content=response.to_dict(), status_code=status_code, media_type="application/json")


def validation_exception_handler(request: Request, exc: ValidationException) -> Response[dict[str, Any]]:
    """Handle request validation errors with per-field details."""
    details: list[ErrorDetail] = []
    for error in exc.extra or []:
        if isinstance(error, dict):
            details.append(
                ErrorDetail(
                    field=error.get("key"),
                    message=str(error.get("message", error)),
                    code="validation_error",
                )
            )
        else:
            details.append(ErrorDetail(message=str(error), code="validation_error"))
    if not details:
        details.append(ErrorDetail(message=str(exc.detail), code="validation_error"))

    logger.warning("Validation error", path=request.url.path, error_count=len(details))
    return _error(
        request,
        HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(message="Validation failed", code="validation_error", details=details),
    )


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Handle Litestar HTTP exceptions."""
    code_map = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        422: "validation_error",
        500: "internal_error",
        503: "service_unavailable",
    }
    error_code = code_map.get(exc.status_code, "error")
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    log = logger.warning if exc.status_code < 500 else logger.error
    log("HTTP exception", path=request.url.path, status_code=exc.status_code, error_code=error_code)
    return _error(request, exc.status_code, ErrorResponse(message=message, code=error_code))


def page_not_found_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle PageNotFoundError exceptions."""
    index = getattr(exc, "index", "unknown")
    logger.warning("Page not found", index=index, path=request.url.path)
    return _error(
        request,
        HTTP_404_NOT_FOUND,
        ErrorResponse(
            message=f"Page not found: {index}",
            code="page_not_found",
            details=[ErrorDetail(field="index", message=str(exc), code="not_found")],
        ),
    )


def invalid_color_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle InvalidColorError exceptions as a validation failure."""
    logger.warning("Invalid color", error=str(exc), path=request.url.path)
    return _error(
        request,
        HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(
            message="Validation failed",
            code="validation_error",
            details=[ErrorDetail(field="color", message=str(exc), code="invalid_color")],
        ),
    )


def invalid_snapshot_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle InvalidSnapshotError exceptions."""
    logger.warning("Invalid snapshot", error=str(exc), path=request.url.path)
    return _error(request, HTTP_400_BAD_REQUEST, ErrorResponse(message=str(exc), code="invalid_snapshot"))


def export_unavailable_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle ExportUnavailableError exceptions."""
    logger.warning("Export unavailable", error=str(exc), path=request.url.path)
    return _error(request, HTTP_503_SERVICE_UNAVAILABLE, ErrorResponse(message=str(exc), code="export_unavailable"))


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle unexpected exceptions without leaking internals to the client."""
    logger.exception("Unhandled exception", path=request.url.path, method=request.method, exc_info=exc)
    return _error(
        request,
        HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(message="An unexpected error occurred. Please try again later.", code="internal_error"),
    )


def get_exception_handlers() -> dict:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions.
    """
    from litestar.exceptions import HTTPException, ValidationException

    from infinicanvas.exceptions import (
        ExportUnavailableError,
        InvalidColorError,
        InvalidSnapshotError,
        PageNotFoundError,
    )

    return {
        ValidationException: validation_exception_handler,
        HTTPException: http_exception_handler,
        PageNotFoundError: page_not_found_handler,
        InvalidColorError: invalid_color_handler,
        InvalidSnapshotError: invalid_snapshot_handler,
        ExportUnavailableError: export_unavailable_handler,
        Exception: generic_exception_handler,
    }
