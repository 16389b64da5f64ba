"""Standard domain error types.

Two disjoint categories, and the concrete conditions refining them:

- ``BusinessError``: user-caused, e.g. invalid data submitted by the user or
  a denied operation. Correctable by the user.
- ``SystemFaultError``: internal or environment problems that are not the
  user's fault.
"""

from .base import BaseError, ErrorCategory


class BusinessError(BaseError):
    """User-caused error, correctable by the caller."""

    category = ErrorCategory.USER
    status_code = 400


class SystemFaultError(BaseError):
    """System-caused error, not attributable to caller input."""

    category = ErrorCategory.SYSTEM
    status_code = 500


# ==================== User-caused ====================


class UnauthenticatedError(BusinessError):
    """Customized error representing unauthenticated operations."""

    status_code = 401
    default_code = "error.unauthenticated"
    default_message = "Not authenticated."


class PermissionDeniedError(BusinessError):
    """Permission denied."""

    status_code = 403
    default_code = "error.permission_denied"


class NotFoundError(BusinessError):
    """Resource not found."""

    status_code = 404
    default_code = "error.not_found"


class ConflictError(BusinessError):
    """Resource conflict or duplicate."""

    status_code = 409
    default_code = "error.conflict"


class InvalidInputError(BusinessError):
    """Invalid input."""

    status_code = 422
    default_code = "error.invalid_input"


# ==================== System-caused ====================


class InternalError(SystemFaultError):
    """Internal server error."""

    default_code = "error.internal"


class ServiceUnavailableError(SystemFaultError):
    """Service temporarily unavailable."""

    status_code = 503
    default_code = "error.service_unavailable"
