"""Error handlers for FastAPI application.

Every failure reaches the client in the same JSON envelope::

    {"error": {"message": ..., "status_code": ..., "details": {...}}}

Application errors keep their own status code, request validation errors
become 422, and database or unexpected errors become a 500 that does not
expose internals.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException, StorageError
from core.logger import get_logger
from typing import Optional

logger = get_logger("core.error_handlers")


def create_error_response(
    message: str,
    status_code: int = 500,
    details: Optional[dict] = None,
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.

    Returns:
        JSONResponse with error details.
    """
    error_body = {
        "error": {
            "message": message,
            "status_code": status_code,
        }
    }

    if details:
        error_body["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=error_body)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions.

    Client errors are logged as warnings, server-side ones as errors with
    the underlying cause.
    """
    if exc.status_code >= 500:
        logger.error(
            "Application error: %s [%s %s] caused by %r",
            exc.message,
            request.method,
            request.url.path,
            exc.__cause__,
        )
    else:
        logger.warning(
            "Application error: %s [%s %s]",
            exc.message,
            request.method,
            request.url.path,
        )

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Handle store failures without echoing driver messages to the client."""
    logger.error(
        "Storage error on %s %s: %s (operation=%s, entity=%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.operation,
        exc.entity,
        exc_info=exc.__cause__ is not None,
    )
    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details={"type": "storage_error", **exc.details},
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors raised by FastAPI.

    Args:
        request: FastAPI request object.
        exc: Request validation error.

    Returns:
        JSONResponse with one entry per invalid field.
    """
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"validation_errors": errors}
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy errors that escaped the store."""
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    # Don't expose internal database errors to clients
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "database_error"}
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=exc,
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"}
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(StorageError, storage_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
