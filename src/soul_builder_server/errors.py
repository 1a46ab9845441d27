"""Global exception handlers and result-to-status mapping.

Flow operations never raise for expected conditions; they return a
``ToolResult`` with an ``ErrorCode``.  ``result_status_code`` maps those
codes to HTTP statuses for the REST routes.

The handlers below cover the remaining request-level failures (bad tool
arguments, unknown tool names) and anything unexpected.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from soul_builder.models.result import ErrorCode, ToolResult

logger = logging.getLogger(__name__)

# --- ToolResult error codes and their HTTP status codes ---
_RESULT_STATUS: dict[ErrorCode, int] = {
    ErrorCode.NO_SESSION: 404,
    ErrorCode.VALIDATION_REQUIRED: 422,
    ErrorCode.NOT_COMPLETE: 409,
    ErrorCode.ALREADY_COMPLETE: 200,
}


def result_status_code(result: ToolResult) -> int:
    """HTTP status for a ToolResult: 200 on success, else by error code."""
    if result.error is None:
        return 200
    return _RESULT_STATUS.get(result.error, 400)


def result_response(result: ToolResult) -> JSONResponse:
    """Serialize a ToolResult with its mapped status code."""
    return JSONResponse(
        status_code=result_status_code(result),
        content=result.model_dump(mode="json", exclude_none=True),
    )


# --- Keyword patterns in ValueError messages and their HTTP status codes ---
# Checked in order; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("not found", 404),
    ("missing", 400),
]

# --- Client-safe messages keyed by HTTP status code ---
_SAFE_MESSAGES: dict[int, str] = {
    404: "Resource not found",
    400: "Invalid request",
}


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map ``ValueError`` to 404 or 400 by message keyword.

    The raw exception message is logged server-side but never sent to the
    client.
    """
    msg = str(exc)
    status = 400
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    return JSONResponse(
        status_code=status,
        content={"detail": _SAFE_MESSAGES.get(status, "Invalid request")},
    )


async def model_validation_error_handler(
    request: Request, exc: ValidationError,
) -> JSONResponse:
    """Map a failed internal model validation to 500.

    ``pydantic.ValidationError`` subclasses ``ValueError``.  Request bodies are
    validated by FastAPI before a route runs, so one raised inside a route is
    an internal invariant break.
    """
    logger.exception("Model validation failed at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (e.g. unknown tool name) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
