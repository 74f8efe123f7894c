"""
Application error taxonomy and the handlers that turn it into JSON responses.

Every handler-level failure ends up as ``{"error": message}`` with the status
code of its category.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error carrying an HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class StateError(AppError):
    """Operation is not valid for the current lifecycle state."""

    status_code = 400


class ServerError(AppError):
    status_code = 500


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def app_error_handler(request: Request, error: AppError) -> JSONResponse:
    if error.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, error.message)
    else:
        logger.info(
            "%s %s -> %s %s",
            request.method, request.url.path, error.status_code, error.message,
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, AuthError) else None
    return _error_response(error.status_code, error.message, headers)


async def validation_error_handler(request: Request, error: RequestValidationError) -> JSONResponse:
    messages = []
    for err in error.errors():
        # drop the leading "body"/"query"/"path" segment
        field = ".".join(str(loc) for loc in err["loc"][1:])
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    logger.warning("Validation error on %s: %s", request.url.path, messages)
    return _error_response(400, "; ".join(messages))


async def http_error_handler(request: Request, error: StarletteHTTPException) -> JSONResponse:
    return _error_response(error.status_code, str(error.detail), getattr(error, "headers", None))


async def unexpected_error_handler(request: Request, error: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Internal server error.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
