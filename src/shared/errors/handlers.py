"""Exception handlers for FastAPI.

Centralized exception handling for the application.
Transforms application errors into HTTP responses, choosing the status by
error and the user-visible text by category.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.shared.context import trace_id_var
from src.shared.logging import get_logger, log_error

from .base import BaseError, ErrorCategory
from .domain import InternalError, InvalidInputError
from .schemas import ErrorResponse

logger = get_logger(__name__)


def public_message(exc: BaseError) -> str:
    """Text of ``exc`` that may be shown to the end user.

    User-caused errors expose their localized message. For system-caused and
    uncategorized errors only catalog text is exposed; otherwise the generic
    internal error message is used so internals never leak.
    """
    if exc.category is ErrorCategory.USER or exc.is_localized:
        return exc.localized_message
    return InternalError.default_message or "Internal server error."


def error_response(exc: BaseError) -> JSONResponse:
    """Build the JSON response for an application error."""
    code = exc.code or InternalError.default_code or ""
    response = ErrorResponse(
        error=code,
        message=public_message(exc),
        trace_id=trace_id_var.get(),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump(),
        headers={"X-Error-Code": code},
    )


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Wrap an unexpected exception as the cause of an InternalError and answer it."""
    error = InternalError(
        message=f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        cause=exc,
    )
    log_error(error, path=request.url.path, method=request.method)
    return error_response(error)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers in FastAPI application.

    Registers handlers for:
    - Application errors (BaseError)
    - Validation errors (RequestValidationError)
    - HTTP errors (StarletteHTTPException)
    - Unexpected exceptions (Exception)

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(BaseError)
    async def app_exception_handler(request: Request, exc: BaseError) -> JSONResponse:
        """Handle application errors.

        Args:
            request: HTTP request
            exc: Application error

        Returns:
            JSONResponse with error details
        """
        log_error(exc, path=request.url.path, method=request.method)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors as invalid input."""
        error = InvalidInputError(cause=exc)
        response = ErrorResponse(
            error=error.code or "",
            message=public_message(error),
            details={"errors": jsonable_encoder(exc.errors())},
            trace_id=trace_id_var.get(),
        )
        return JSONResponse(
            status_code=error.status_code,
            content=response.model_dump(),
            headers={"X-Error-Code": error.code or ""},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle standard HTTP exceptions from FastAPI/Starlette."""
        error_code = f"error.http.{exc.status_code}"
        response = ErrorResponse(
            error=error_code,
            message=str(exc.detail),
            trace_id=trace_id_var.get(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(),
            headers={"X-Error-Code": error_code, **(exc.headers or {})},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all unhandled exceptions (last line of defense).

        Only reached for exceptions raised outside the request middleware.
        """
        return unhandled_error_response(request, exc)
