"""
Exception handlers.

Every error response is a JSON object with a ``message`` field and, for
validation failures, an optional ``details`` list. Internal details and
stack traces are logged, never returned.
"""

from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from weatherdash.errors import AppError, AuthError, InternalError
from weatherdash.utils.logging_config import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = InternalError.default_message


def create_json_error_response(
    status_code: int,
    message: str,
    details: Optional[List[str]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Create JSON error response with optional validation details."""
    content = {"message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> Response:
    """Handle all AppError subclasses with their own status codes."""
    headers = None
    if isinstance(exc, AuthError) and exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return create_json_error_response(exc.status_code, exc.message, exc.details, headers)


async def request_validation_handler(_: Request, exc: RequestValidationError) -> Response:
    """Malformed bodies and wrong field types become 400 with details."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        details.append(f"{location}: {message}" if location else message)
    return create_json_error_response(400, "Validation error", details)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> Response:
    """Framework HTTP errors such as unknown routes."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return create_json_error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def rate_limit_handler(_: Request, exc: RateLimitExceeded) -> Response:
    return create_json_error_response(429, "Too many requests", [f"Rate limit exceeded: {exc.detail}"])


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
    """Storage unavailable or misbehaving."""
    logger.exception(f"Storage error on {request.method} {request.url.path}: {exc}")
    return create_json_error_response(500, INTERNAL_ERROR_MESSAGE)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return create_json_error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
