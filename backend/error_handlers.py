"""
Exception handlers mapping application errors to HTTP responses.

Every error body has the shape ``{"error": ..., "message": ...}`` (plus
``"field"`` for validation errors). Unexpected errors are logged with their
traceback and answered with a generic message; internal detail never
reaches the client.

Usage:
    from backend.error_handlers import register_exception_handlers

    register_exception_handlers(app)
"""

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from application.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidOperationError,
)

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    error: str,
    message: str,
    field: Optional[str] = None,
) -> JSONResponse:
    body = {"error": error, "message": message}
    if field:
        body["field"] = field
    return JSONResponse(status_code=status_code, content=body)


async def handle_domain_validation(request: Request, exc: DomainValidationError) -> JSONResponse:
    logger.info(f"Validation failed on {request.url.path}: {exc.message}")
    return error_response(400, "Invalid argument", exc.message, exc.field)


async def handle_entity_not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return error_response(404, "Resource not found", exc.message)


async def handle_invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
    logger.info(f"Invalid operation on {request.url.path}: {exc.message}")
    return error_response(400, "Invalid operation", exc.message)


async def handle_model_validation(request: Request, exc: ValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return error_response(400, "Invalid argument", first.get("msg", str(exc)), field)


async def handle_timeout(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(f"Request timed out: {request.method} {request.url.path}")
    return error_response(408, "Request timeout", "The request timed out")


async def handle_not_implemented(request: Request, exc: NotImplementedError) -> JSONResponse:
    return error_response(501, "Not implemented", "This feature is not yet implemented")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return error_response(500, "Internal server error", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all application exception handlers on an app."""
    # Starlette picks the handler of the nearest class in the exception's MRO
    app.add_exception_handler(EntityNotFoundError, handle_entity_not_found)
    app.add_exception_handler(InvalidOperationError, handle_invalid_operation)
    app.add_exception_handler(DomainValidationError, handle_domain_validation)
    app.add_exception_handler(ValidationError, handle_model_validation)
    app.add_exception_handler(asyncio.TimeoutError, handle_timeout)
    app.add_exception_handler(TimeoutError, handle_timeout)
    app.add_exception_handler(NotImplementedError, handle_not_implemented)
    app.add_exception_handler(Exception, handle_unexpected)
