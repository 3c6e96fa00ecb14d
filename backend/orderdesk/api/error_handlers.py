"""Error Handlers — every failure leaves the API in one JSON envelope.

Invariants:
    - Envelope: {"error": {code, message, category, severity, [timestamp], [details]}}
    - OrderDeskError.details reach the client (rejected field, allowed roles, ...)
    - Request validation -> 400 with one detail per rejected parameter
    - Anything else -> 500 without internal details (logged with traceback)

Design Decisions:
    - Handlers are module functions registered with add_exception_handler, so they
      can be called directly and the app wiring stays in register_error_handlers
    - Log level follows the error's severity, not its HTTP status
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from orderdesk.core.errors import ErrorCategory, ErrorSeverity, OrderDeskError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderDeskError, handle_orderdesk_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_orderdesk_error(request: Request, exc: OrderDeskError) -> JSONResponse:
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_describe(error) for error in exc.errors()]
    logger.warning(
        f"Rejected parameters on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request parameters",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _describe(error: dict) -> dict:
    """("query", "page") -> field "page", source "query"."""
    source, *path = error["loc"] or ("request",)
    return {
        "field": ".".join(str(part) for part in path) or source,
        "source": source,
        "message": error["msg"],
        "type": error["type"],
    }


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details:
        body["details"] = details
    return {"error": body}
