"""Application exceptions and their HTTP rendering.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"statusCode", "message", "error"}`` JSON bodies.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500
    error = "Internal Server Error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    error = "Bad Request"
    default_message = "Validation failed"


# Validation failures detected inside a service (after the request body parsed)
ValidationFailedError = BadRequestError


class UnauthorizedError(AppError):
    status_code = 401
    error = "Unauthorized"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    error = "Forbidden"
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    error = "Not Found"
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    error = "Conflict"
    default_message = "Conflict"


class InternalError(AppError):
    pass


class RecipeCreationError(BadRequestError):
    """The recipe rows were written but could not be read back; nothing is kept."""

    default_message = "Error creating recipe"


def _error_body(status_code: int, error: str, message) -> dict:
    return {"statusCode": status_code, "message": message, "error": error}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.error, exc.message),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=_error_body(400, "Bad Request", jsonable_encoder(exc.errors())),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} violated a constraint: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content=_error_body(409, "Conflict", "Resource conflicts with existing data"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "Internal Server Error", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
