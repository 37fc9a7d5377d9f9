import logging
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from activityrec.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# (status_code, error_type) per UserError subclass
USER_ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (AuthenticationError, 401, "authentication_error"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
    (PayloadTooLargeError, 413, "payload_too_large"),
    (UnsupportedMediaTypeError, 415, "unsupported_media_type"),
    (ValidationError, 400, "validation_error"),
]


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, details: list[dict[str, str]] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content: dict[str, object] = {"error": message}
    if error_type:
        content["type"] = error_type
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    for error_class, status_code, error_type in USER_ERROR_STATUS:
        if isinstance(exc, error_class):
            return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)

    # Default for any other UserError subclass
    return create_json_error_response(status_code=400, message=str(exc), error_type="bad_request")


async def http_exception_handler(_: Request, exc: Exception) -> Response:
    """Give HTTP errors raised by routing and static files the same body shape."""
    http_exc = cast(StarletteHTTPException, exc)
    response = create_json_error_response(
        status_code=http_exc.status_code, message=str(http_exc.detail), error_type="http_error"
    )
    if http_exc.headers:
        response.headers.update(http_exc.headers)
    return response


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request bodies/params as 400 with per-field details."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")),
            "message": error["msg"],
        }
        for error in errors
    ]
    return create_json_error_response(
        status_code=400, message="Validation failed", error_type="validation_error", details=details
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
