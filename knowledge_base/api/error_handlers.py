"""
Exception handlers.

Maps the exception hierarchy, request validation errors, and HTTP errors to
the JSON error envelope {"error", "hint"?, "details"?}. Stack traces are
logged, never returned.

Dependencies: fastapi, knowledge_base.core.exceptions
System role: HTTP error translation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from knowledge_base.core.exceptions import KnowledgeBaseException
from knowledge_base.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, hint: str | None = None, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, hint=hint, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def knowledge_base_exception_handler(request: Request, exc: KnowledgeBaseException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} - {type(exc).__name__}: {exc}",
            extra={"error_type": type(exc).__name__},
        )
    else:
        logger.info(f"{request.method} {request.url.path} - {exc.status_code} {exc.message}")
    return _error_response(exc.status_code, exc.message, exc.hint, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return _error_response(
        400,
        "Invalid request",
        hint="Check the request body and path parameters",
        details={"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"{request.method} {request.url.path} - Unhandled {type(exc).__name__}",
        extra={"error_type": type(exc).__name__, "error_msg": str(exc)},
    )
    return _error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the application."""
    app.add_exception_handler(KnowledgeBaseException, knowledge_base_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
