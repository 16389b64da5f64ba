"""Shared errors package.

Structured, chainable application errors with a stable JSON envelope.
"""

from .base import BaseError, ErrorCategory
from .catalog import (
    MessageCatalog,
    get_message_catalog,
    localize,
    set_message_catalog,
    use_locale,
)
from .decorators import safe
from .domain import (
    BusinessError,
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    ServiceUnavailableError,
    SystemFaultError,
    UnauthenticatedError,
)
from .envelope import ErrorEnvelope, parse_envelope, render_envelope
from .handlers import (
    error_response,
    public_message,
    setup_exception_handlers,
    unhandled_error_response,
)
from .mapping import ExceptionMapper
from .schemas import ErrorResponse, ErrorTypeInfo

__all__ = [
    # Base
    "BaseError",
    "ErrorCategory",
    # Categories
    "BusinessError",
    "SystemFaultError",
    # Domain errors
    "UnauthenticatedError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "InvalidInputError",
    "InternalError",
    "ServiceUnavailableError",
    # Envelope
    "ErrorEnvelope",
    "render_envelope",
    "parse_envelope",
    # Localization
    "MessageCatalog",
    "set_message_catalog",
    "get_message_catalog",
    "localize",
    "use_locale",
    # Mapping
    "ExceptionMapper",
    # Decorators
    "safe",
    # Handlers
    "setup_exception_handlers",
    "error_response",
    "public_message",
    "unhandled_error_response",
    # Schemas
    "ErrorResponse",
    "ErrorTypeInfo",
]
