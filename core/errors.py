"""Domain error taxonomy and the JSON envelope it is rendered into.

Every response carries ``{code, success, message?, data?}``. The ``code`` is a
domain signal, not the transport status: 301 means "not authenticated" and is
returned with HTTP 200 like every other outcome.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

CODE_OK = 200
CODE_NOT_AUTHENTICATED = 301
CODE_BAD_REQUEST = 400
CODE_NOT_FOUND = 404
CODE_INTERNAL = 500


class AppError(Exception):
    code: int = CODE_INTERNAL
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AppError):
    code = CODE_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    code = CODE_NOT_AUTHENTICATED
    default_message = "User is not logged in"


class NotFoundError(AppError):
    code = CODE_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    code = CODE_BAD_REQUEST
    default_message = "Resource already exists"


class InternalError(AppError):
    code = CODE_INTERNAL
    default_message = "Internal server error"


def envelope(
    *,
    code: int = CODE_OK,
    message: str | None = None,
    data: Any = None,
    **extra: Any,
) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "success": code == CODE_OK}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return InvalidInputError.default_message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "Invalid value")
    return f"{location}: {msg}" if location else msg


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        if isinstance(exc, InternalError):
            logger.error("Internal error on %s: %s", request.url.path, exc.message)
        return JSONResponse(envelope(code=exc.code, message=exc.message))

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(envelope(code=CODE_BAD_REQUEST, message=_validation_message(exc)))

    @app.exception_handler(SQLAlchemyError)
    async def _storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage error on %s", request.url.path)
        return JSONResponse(envelope(code=CODE_INTERNAL, message=InternalError.default_message))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(envelope(code=CODE_INTERNAL, message=InternalError.default_message))
