"""
FastAPI exception handlers for structured error responses.

Maps ClassificationError status codes to HTTP status codes. The code name
and message are returned as-is in the body, so backend codes that have no
HTTP equivalent still reach the caller unchanged.
"""

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from box_image_service.api.models import ErrorResponse
from box_image_service.models.enums import StatusCode
from box_image_service.service.exceptions import ClassificationError

logger = structlog.get_logger(__name__)

CODE_TO_HTTP_STATUS: dict[StatusCode, int] = {
    StatusCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    StatusCode.FAILED_PRECONDITION: status.HTTP_400_BAD_REQUEST,
    StatusCode.OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    StatusCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    StatusCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    StatusCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StatusCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    StatusCode.ABORTED: status.HTTP_409_CONFLICT,
    StatusCode.RESOURCE_EXHAUSTED: status.HTTP_429_TOO_MANY_REQUESTS,
    StatusCode.CANCELLED: 499,
    StatusCode.UNIMPLEMENTED: status.HTTP_501_NOT_IMPLEMENTED,
    StatusCode.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    StatusCode.DEADLINE_EXCEEDED: status.HTTP_504_GATEWAY_TIMEOUT,
}


def http_status_for(code: StatusCode | str) -> int:
    """HTTP status for a status code. Unrecognized codes are server errors."""
    member = StatusCode.lookup(code)
    if member is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return CODE_TO_HTTP_STATUS.get(member, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def classification_error_handler(
    request: Request, exc: ClassificationError
) -> JSONResponse:
    """
    Handle Classify failures.

    Args:
        request: FastAPI request
        exc: ClassificationError instance

    Returns:
        JSON error response with the error code and message
    """
    http_status = http_status_for(exc.code)
    log = logger.error if http_status >= 500 else logger.warning
    log(
        "Classify failed",
        error_type=type(exc).__name__,
        code=exc.code_name,
        error=exc.message,
        http_status=http_status,
    )

    body = ErrorResponse(
        error=exc.code_name,
        message=exc.message,
        details=exc.details or None,
    )
    return JSONResponse(
        status_code=http_status,
        content=body.model_dump(mode="json"),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies (not JSON, wrong field types).

    Maps to 400 Bad Request (client error).
    """
    logger.warning(
        "Invalid request format",
        errors=exc.errors(),
    )

    body = ErrorResponse(
        error="invalid_request",
        message="Request validation failed",
        details=[
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.error(
        "Unexpected error",
        error_type=type(exc).__name__,
        exc_info=exc,
    )

    body = ErrorResponse(
        error="internal_error",
        message="An unexpected error occurred",
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ClassificationError: classification_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
