"""Mapping of infrastructure errors to domain errors.

Foreign exceptions are never swallowed: each mapped error keeps the original
exception as its ``cause``.
"""

from collections.abc import Callable
from typing import Any

from httpx import ConnectError, HTTPError, TimeoutException
from pydantic import ValidationError

from src.shared.logging import get_logger

from .base import BaseError
from .domain import InternalError, InvalidInputError, ServiceUnavailableError

logger = get_logger(__name__)


class ExceptionMapper:
    """Centralized mapping of technical exceptions to domain exceptions."""

    _handlers: dict[type[BaseException], Callable[[Any, str], BaseError]] = {}

    @classmethod
    def register(
        cls, *exception_types: type[BaseException]
    ) -> Callable[[Callable[[Any, str], BaseError]], Callable[[Any, str], BaseError]]:
        """Register a handler for exception types.

        Usage:
            @ExceptionMapper.register(KeyError)
            def _handle_key_error(exc: KeyError, func_name: str) -> BaseError:
                return NotFoundError(cause=exc)
        """

        def decorator(
            handler: Callable[[Any, str], BaseError]
        ) -> Callable[[Any, str], BaseError]:
            for exc_type in exception_types:
                cls._handlers[exc_type] = handler
            return handler

        return decorator

    @classmethod
    def unregister(cls, *exception_types: type[BaseException]) -> None:
        """Remove handlers for exception types."""
        for exc_type in exception_types:
            cls._handlers.pop(exc_type, None)

    @classmethod
    def map(cls, exc: BaseException, func_name: str = "") -> BaseError:
        """Map a technical exception to a domain exception.

        Application errors are returned unchanged. Handlers are matched on the
        exception's MRO, most specific first.

        Args:
            exc: The technical exception to map
            func_name: Name of the function where exception occurred (for logging)

        Returns:
            Domain exception whose cause is ``exc``
        """
        if isinstance(exc, BaseError):
            return exc

        for exc_type in type(exc).__mro__:
            handler = cls._handlers.get(exc_type)
            if handler is not None:
                return handler(exc, func_name)

        logger.opt(exception=exc).error(
            "Unhandled exception",
            function=func_name,
            exception_type=type(exc).__name__,
        )
        where = f" in {func_name}" if func_name else ""
        return InternalError(
            message=f"Unhandled {type(exc).__name__}{where}: {exc}",
            cause=exc,
        )


# --- Register default handlers ---


@ExceptionMapper.register(ValidationError)
def _handle_validation_error(exc: ValidationError, func_name: str) -> BaseError:
    """Pydantic: invalid data."""
    return InvalidInputError(
        message=f"{exc.error_count()} validation error(s) for {exc.title}",
        cause=exc,
    )


@ExceptionMapper.register(TimeoutException, ConnectError, HTTPError)
def _handle_httpx_error(exc: HTTPError, func_name: str) -> BaseError:
    """HTTPX: external service error."""
    logger.warning("External HTTP error", function=func_name, error=str(exc))
    return ServiceUnavailableError(
        message=f"External service error: {type(exc).__name__}",
        cause=exc,
    )


@ExceptionMapper.register(TimeoutError, ConnectionError)
def _handle_os_connection_error(exc: OSError, func_name: str) -> BaseError:
    """Socket-level timeout or connection failure."""
    logger.warning("Connection error", function=func_name, error=str(exc))
    return ServiceUnavailableError(
        message=f"Connection error: {type(exc).__name__}",
        cause=exc,
    )
