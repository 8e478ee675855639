"""
API error taxonomy and the exception handlers that render it.

Every error leaves the service as ``{"message": "..."}`` plus a status code.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class MissingToken(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Token required"


class InvalidToken(ApiError):
    """Malformed header, bad signature or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"

    def __init__(self, reason: str = "invalid token"):
        super().__init__()
        self.reason = reason

    def __str__(self) -> str:
        return self.reason


class InvalidCredentials(ApiError):
    """Unknown user or wrong password; deliberately not distinguished."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe_validation(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        fields.append(".".join(loc) or "body")
    return "Invalid or missing fields: " + ", ".join(dict.fromkeys(fields))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the ``{"message"}`` renderers to ``app``."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return _message(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return _message(status.HTTP_400_BAD_REQUEST, _describe_validation(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, ApiError.message)
