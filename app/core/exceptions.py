"""
Error taxonomy for the subscription backend and the FastAPI handlers that
turn it into JSON responses.
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logger import logger_manager


logger = logger_manager.get_logger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AppError):
    """Missing or malformed request field. Raised before any side effect."""

    status_code = 400
    default_message = "Invalid input"


class AuthDenied(AppError):
    status_code = 401
    default_message = "Invalid admin password"


class StorageError(AppError):
    """The record store was unreachable or rejected the operation."""

    status_code = 500
    default_message = "Storage operation failed"


class NotificationError(AppError):
    """Delivery failed after retries. Logged, never sent to an HTTP client."""

    default_message = "Notification delivery failed"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, StorageError):
        logger.error(f"StorageError on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location or 'body'}: {errors[0].get('msg', 'invalid value')}"
    else:
        message = "Invalid request body"
    logger.warning(f"Request validation failed on {request.url.path}: {message}")
    return error_response(400, message)


async def http_exception_handler(_request: Request, exc: HTTPException):
    logger.error(f"HTTPException: {exc}")
    error_detail = exc.detail

    if isinstance(error_detail, dict):
        error_message = error_detail.get("error", str(error_detail))
    else:
        error_message = str(error_detail)

    return error_response(exc.status_code, error_message)


async def general_exception_handler(_request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {exc}")
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
