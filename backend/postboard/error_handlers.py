"""
Postboard Backend — Error Handlers
====================================

What:  The single normalization point for failed requests.
How:   `register_exception_handlers(app)` installs four handlers:

    PostboardError            → exc.status_code / exc.error_code
    RequestValidationError    → 400 validation_error (field-level details)
    Starlette HTTPException   → 404 not_found for unmatched routes,
                                otherwise the raised status (405, ...)
    Exception (catch-all)     → 500 internal_server_error

Every error body has the same shape (schemas.common.ErrorResponse):
    {"error", "message", "status_code", "request_id", "details"?}

Invariants:
    - 5xx bodies never carry driver messages, SQL or stack traces; those are
      logged server-side with the request id.
    - 401 responses carry `WWW-Authenticate: Bearer`.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.exceptions import PostboardError, UnauthorizedError
from postboard.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def _request_id(request: Optional[Request] = None) -> str:
    rid = request_id_var.get("")
    if not rid and request is not None:
        rid = getattr(request.state, "request_id", "")
    return rid


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Build the JSON error body shared by handlers and middleware."""
    rid = request_id if request_id is not None else request_id_var.get("")
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "status_code": status_code,
        "request_id": rid,
    }
    if details:
        content["details"] = details
    headers = dict(headers or {})
    if rid:
        headers.setdefault("X-Request-ID", rid)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(PostboardError)
    async def handle_postboard_error(request: Request, exc: PostboardError):
        rid = _request_id(request)
        headers = {}
        if isinstance(exc, UnauthorizedError):
            headers["WWW-Authenticate"] = "Bearer"

        if exc.status_code >= 500:
            # Context may hold internals: log it, do not return it
            logger.error(
                "[%s] %s on %s: %s | Context: %s",
                rid, type(exc).__name__, request.url.path, exc.message, exc.context,
            )
            details = None
        else:
            logger.warning(
                "[%s] %s on %s: %s", rid, type(exc).__name__, request.url.path, exc.message,
            )
            details = exc.context

        return error_response(
            exc.status_code,
            exc.error_code,
            exc.message,
            details=details,
            headers=headers,
            request_id=rid,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = _request_id(request)
        errors = [
            {
                "field": ".".join(str(loc) for loc in e.get("loc", ())),
                "message": e.get("msg", ""),
                "type": e.get("type", ""),
            }
            for e in exc.errors()
        ]
        logger.warning("[%s] Validation error on %s: %s", rid, request.url.path, errors)
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "validation_error",
            "Invalid request data",
            details={"errors": errors},
            request_id=rid,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        rid = _request_id(request)
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(
                status.HTTP_404_NOT_FOUND,
                "not_found",
                f"Route {request.method} {request.url.path} not found",
                request_id=rid,
            )
        return error_response(
            exc.status_code,
            "http_error",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
            request_id=rid,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error(
            "[%s] Unexpected error on %s: %s",
            rid,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            request_id=rid,
        )
