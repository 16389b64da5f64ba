"""
Context variables for request tracing and localization.

This module provides context variables for trace IDs, request IDs and the
negotiated locale that can be accessed from anywhere in the codebase during
request processing.
"""

from contextvars import ContextVar

# Context variables for request tracing
trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Locale negotiated for the current request ("" means catalog default)
locale_var: ContextVar[str] = ContextVar("locale", default="")


def get_trace_id() -> str:
    """Get current trace ID from context.

    Returns:
        Trace ID string or empty string if not set.
    """
    return trace_id_var.get()


def get_request_id() -> str:
    """Get current request ID from context.

    Returns:
        Request ID string or empty string if not set.
    """
    return request_id_var.get()


def get_locale() -> str:
    """Get current locale from context."""
    return locale_var.get()


def set_trace_id(trace_id: str) -> None:
    """Set trace ID in context.

    Args:
        trace_id: Trace ID to set.
    """
    trace_id_var.set(trace_id)


def set_request_id(request_id: str) -> None:
    """Set request ID in context.

    Args:
        request_id: Request ID to set.
    """
    request_id_var.set(request_id)


def set_locale(locale: str) -> None:
    """Set locale in context."""
    locale_var.set(locale)


def clear_request_context() -> None:
    """Reset all request-scoped context variables."""
    trace_id_var.set("")
    request_id_var.set("")
    locale_var.set("")
